"""Unit tests for Redis-based mixins.

Test coverage includes:
    1. Initialization and configuration
       - Ensures correct initialization with or without a Redis client.
       - Confirms initialization never contacts Redis.
    2. Healthcheck behavior
       - Healthcheck pings Redis.
       - Missed pong from Redis raises error (or returns False on request).
       - Errors replied to PING (e.g. NOPERM) are reported the same way.
"""

from unittest.mock import MagicMock, patch

import pytest
import redis

from shortlinker.dao.exceptions import BackendUnavailableError
from shortlinker.dao.redis.mixins import RedisClientMixin
from shortlinker.dao.redis.redis_key_schema import RedisKeySchema


# -------------------------------
# 1. Initialization and configuration
# -------------------------------


def test_initialize_without_redis_client():
    """Ensure DAO creates a Redis client when none is provided."""
    redis_config = {
        'redis_host': 'redis',
        'redis_port': 6379,
        'redis_db': 0,
        'redis_decode_responses': True,
        'redis_username': 'default',
        'redis_password': 'password',
        'redis_socket_timeout': 2.5,
    }

    with patch('shortlinker.dao.redis.mixins.redis.Redis', autospec=True) as redis_mock:
        redis_mock_instance = redis_mock.return_value
        mixin = RedisClientMixin(**redis_config, prefix='testapp:test')

        redis_mock.assert_called_once_with(
            host='redis',
            port=6379,
            db=0,
            decode_responses=True,
            username='default',
            password='password',
            socket_timeout=2.5,
            socket_connect_timeout=5.0,
        )
        assert mixin.redis is redis_mock_instance
        redis_mock_instance.ping.assert_not_called()


def test_initialize_casts_port_and_db():
    """Ensure string port/db values (e.g. from environment variables) are cast to int."""
    with patch('shortlinker.dao.redis.mixins.redis.Redis', autospec=True) as redis_mock:
        RedisClientMixin(redis_host='redis', redis_port='6380', redis_db='2')

        _, kwargs = redis_mock.call_args
        assert kwargs['port'] == 6380
        assert kwargs['db'] == 2


def test_initialize_with_redis_client(redis_client):
    """Ensure DAO correctly uses a pre-initialized Redis client."""
    mixin = RedisClientMixin(redis_client=redis_client, prefix='testapp:test')

    assert mixin.redis is redis_client
    assert isinstance(mixin.keys, RedisKeySchema)
    assert mixin.keys.counter_key() == 'testapp:test:next.url.id'
    redis_client.ping.assert_not_called()


# -------------------------------
# 2. Healthcheck behavior
# -------------------------------


def test_healthcheck_passes(redis_client):
    """Ensure healthcheck passes when Redis responds."""
    mixin = RedisClientMixin(redis_client=redis_client, prefix='testapp:test')

    assert mixin.healthcheck() is True
    redis_client.ping.assert_called_once()


@pytest.mark.parametrize('error', [redis.exceptions.ConnectionError('Connection error'), redis.exceptions.TimeoutError('Timeout')])
def test_healthcheck_fails(redis_client, error):
    """Ensure healthcheck raises BackendUnavailableError when Redis is unreachable."""
    redis_client.ping.side_effect = error
    mixin = RedisClientMixin(redis_client=redis_client, prefix='testapp:test')

    exception_message = "Can't connect to Redis at 203.0.113.1:18000/5. Check the provided configuration parameters."
    with pytest.raises(BackendUnavailableError, match=exception_message):
        mixin.healthcheck()


def test_healthcheck_returns_false_without_raising(redis_client):
    """Ensure healthcheck(raise_error=False) reports failure as False."""
    redis_client.ping.side_effect = redis.exceptions.ConnectionError('Connection error')
    mixin = RedisClientMixin(redis_client=redis_client)

    assert mixin.healthcheck(raise_error=False) is False


def test_healthcheck_with_unconfigured_client():
    """Ensure the connection description works with a bare redis.Redis mock."""
    client = MagicMock(spec=redis.Redis, connection_pool=MagicMock(spec=redis.ConnectionPool, connection_kwargs={}))
    client.ping.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(BackendUnavailableError, match="Can't connect to Redis at None:None/None"):
        RedisClientMixin(redis_client=client).healthcheck()


@pytest.mark.parametrize(
    'error',
    [
        redis.exceptions.ResponseError('unknown command'),
        redis.exceptions.NoPermissionError("NOPERM User default has no permissions to run the 'ping' command"),
    ],
)
def test_healthcheck_rejected_ping(redis_client, error):
    """Ensure server-side PING errors are reported as BackendUnavailableError too."""
    redis_client.ping.side_effect = error
    mixin = RedisClientMixin(redis_client=redis_client)

    with pytest.raises(BackendUnavailableError, match='Redis at 203.0.113.1:18000/5 rejected PING'):
        mixin.healthcheck()
    assert mixin.healthcheck(raise_error=False) is False
