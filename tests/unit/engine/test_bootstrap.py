"""Unit tests for initialize_engine() in bootstrap.py."""

from unittest.mock import MagicMock, patch

import pytest
import redis

from shortlinker.constants import OutcomeKind
from shortlinker.dao.exceptions import BackendUnavailableError
from shortlinker.dao.redis import KeyValueRedisDAO
from shortlinker.engine import ShortLinkEngine, initialize_engine


@pytest.fixture
def redis_client():
    client = MagicMock(
        spec=redis.Redis,
        connection_pool=MagicMock(spec=redis.ConnectionPool, connection_kwargs={'host': 'redis', 'port': 6379, 'db': 0}),
    )
    client.ping.return_value = True
    return client


def test_initialize_engine(redis_client):
    outcome = initialize_engine({}, prefix='shortlinker:test', atomic_writes=True, redis_client=redis_client)

    assert outcome.ok
    engine = outcome.value
    assert isinstance(engine, ShortLinkEngine)
    assert isinstance(engine.dao, KeyValueRedisDAO)
    assert engine.dao.redis is redis_client
    assert engine.atomic_writes is True
    assert engine.keys.counter_key() == 'shortlinker:test:next.url.id'
    redis_client.ping.assert_called_once()


def test_initialize_engine_with_unreachable_backend(redis_client):
    """Ensure an unreachable backend is reported, not raised."""
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection refused')

    outcome = initialize_engine({}, redis_client=redis_client)

    assert outcome.kind is OutcomeKind.BACKEND_UNAVAILABLE
    assert isinstance(outcome.error, BackendUnavailableError)
    assert "Can't connect to Redis at redis:6379/0." in str(outcome.error)


def test_initialize_engine_from_connection_parameters():
    with patch('shortlinker.dao.redis.mixins.redis.Redis', autospec=True) as redis_mock:
        redis_mock.return_value.ping.return_value = True

        outcome = initialize_engine({'redis_host': 'redis.test', 'redis_port': 6380, 'redis_db': 1})

    assert outcome.ok
    _, kwargs = redis_mock.call_args
    assert (kwargs['host'], kwargs['port'], kwargs['db']) == ('redis.test', 6380, 1)


def test_initialize_engine_with_backend_response_error(redis_client):
    """Ensure errors replied by the backend are reported, not raised."""
    redis_client.ping.side_effect = redis.exceptions.ResponseError("NOPERM this user has no permissions to run the 'ping' command")

    outcome = initialize_engine({}, redis_client=redis_client)

    assert outcome.kind is OutcomeKind.BACKEND_UNAVAILABLE
    assert isinstance(outcome.error, BackendUnavailableError)
    assert 'Redis at redis:6379/0 rejected PING' in str(outcome.error)
