"""Unit tests for the handlers' shared helpers in common.py.

Test coverage includes:

1. Response builders
2. URL validation
3. Engine initialization from a lambda configuration
"""

import json

import pytest

from shortlinker.constants import OutcomeKind
from shortlinker.engine import Outcome
from shortlinker.lambdas import common
from shortlinker.dao.exceptions import BackendUnavailableError, CorruptRecordError, ShortLinkNotFoundError


# -------------------------------
# 1. Response builders
# -------------------------------


def test_json_response_merges_headers():
    response = common.json_response(201, {'shortlink': '21'}, headers={'X-Trace': 'abc'})

    assert response['statusCode'] == 201
    assert response['headers'] == {'Content-Type': 'application/json', 'X-Trace': 'abc'}
    assert json.loads(response['body']) == {'shortlink': '21'}


def test_error_response_without_details():
    response = common.error_response(500)

    assert json.loads(response['body']) == {'message': 'Internal Server Error'}


def test_response_307():
    response = common.response_307('https://www.baidu.com')

    assert response['statusCode'] == 307
    assert response['headers'] == {'Location': 'https://www.baidu.com'}


@pytest.mark.parametrize(
    'error, status_code, body',
    [
        (
            ShortLinkNotFoundError("Short link with code '21' not found."),
            404,
            {'message': "Not Found (Short link with code '21' not found.)", 'errorCode': 'SHORTLINK_NOT_FOUND'},
        ),
        (
            BackendUnavailableError("Can't connect to Redis at localhost:6379/0."),
            500,
            {'message': 'Internal Server Error', 'errorCode': 'BACKEND_UNAVAILABLE'},
        ),
        (
            CorruptRecordError("Detail record of short link '21' is malformed."),
            500,
            {'message': 'Internal Server Error'},
        ),
    ],
)
def test_outcome_error_response(error, status_code, body):
    response = common.outcome_error_response(Outcome.failure(error))

    assert response['statusCode'] == status_code
    assert json.loads(response['body']) == body


# -------------------------------
# 2. URL validation
# -------------------------------


@pytest.mark.parametrize(
    'url, expected',
    [
        ('https://www.baidu.com', True),
        ('http://example.com/path?q=1#frag', True),
        ('HTTPS://EXAMPLE.COM', True),
        ('ftp://example.com', False),
        ('www.baidu.com', False),
        ('https://', False),
        ('', False),
        (None, False),
        (42, False),
    ],
)
def test_is_valid_url(url, expected):
    assert common.is_valid_url(url) is expected


# -------------------------------
# 3. Engine initialization
# -------------------------------


def test_engine_from_config(monkeypatch):
    calls = []

    def fake_initialize_engine(redis_config, **kwargs):
        calls.append((redis_config, kwargs))
        return Outcome.success('engine')

    monkeypatch.setattr(common, 'initialize_engine', fake_initialize_engine)
    monkeypatch.setattr(common, 'app_prefix', lambda: 'shortlinker:test')

    outcome = common.engine_from_config({'redis': {'host': 'redis.test', 'port': 6379}, 'engine': {'atomic_writes': True}})

    assert outcome.kind is OutcomeKind.SUCCESS
    assert calls == [
        (
            {'redis_host': 'redis.test', 'redis_port': 6379},
            {'prefix': 'shortlinker:test', 'atomic_writes': True},
        )
    ]


def test_engine_from_config_defaults_to_non_atomic_writes(monkeypatch):
    captured = {}
    monkeypatch.setattr(common, 'initialize_engine', lambda redis_config, **kwargs: captured.update(kwargs))
    monkeypatch.setattr(common, 'app_prefix', lambda: None)

    common.engine_from_config({'redis': {}})

    assert captured == {'prefix': None, 'atomic_writes': False}
