"""Unit tests for the RedisKeySchema class in redis_key_schema.py.

Test coverage includes:

1. Key generation without a prefix
   - Ensures every record key follows the shared layout.

2. Custom prefix behavior
   - Confirms keys are correctly prefixed when a valid prefix is provided.

3. Invalid prefix types
   - Ensures improper prefix types raise TypeError.
"""

import pytest

from shortlinker.dao.redis.redis_key_schema import RedisKeySchema


# -------------------------------
# 1. Key generation without a prefix
# -------------------------------


def test_counter_key():
    """Ensure the global counter lives under a single well-known key."""
    assert RedisKeySchema().counter_key() == 'next.url.id'


@pytest.mark.parametrize(
    'short_code, url_key, hash_key, detail_key',
    [
        ('abc123', 'shortlink:abc123:url', 'urlhash:abc123:url', 'shortlink:abc123:detail'),
        ('XyZ789', 'shortlink:XyZ789:url', 'urlhash:XyZ789:url', 'shortlink:XyZ789:detail'),
        ('0', 'shortlink:0:url', 'urlhash:0:url', 'shortlink:0:detail'),
    ],
)
def test_record_keys(short_code, url_key, hash_key, detail_key):
    """Ensure record keys are colon-delimited and parameterized by short code."""
    keys = RedisKeySchema()
    assert keys.shortlink_url_key(short_code) == url_key
    assert keys.urlhash_key(short_code) == hash_key
    assert keys.shortlink_detail_key(short_code) == detail_key


def test_urlhash_key_with_fingerprint():
    """Ensure the dedup index shares the urlhash key pattern."""
    fingerprint = 'a9993e364706816aba3e25717850c26c9cd0d89d'
    assert RedisKeySchema().urlhash_key(fingerprint) == f'urlhash:{fingerprint}:url'


# -------------------------------
# 2. Custom prefix behavior
# -------------------------------


@pytest.mark.parametrize(
    'prefix, expected_counter_key, expected_url_key',
    [
        ('testprefix', 'testprefix:next.url.id', 'testprefix:shortlink:abc123:url'),
        ('shortlinker:prod', 'shortlinker:prod:next.url.id', 'shortlinker:prod:shortlink:abc123:url'),
        (None, 'next.url.id', 'shortlink:abc123:url'),
    ],
)
def test_key_prefixing(prefix, expected_counter_key, expected_url_key):
    """Ensure keys are correctly prefixed when a prefix is provided."""
    keys = RedisKeySchema(prefix=prefix)
    assert keys.counter_key() == expected_counter_key
    assert keys.shortlink_url_key('abc123') == expected_url_key


# -------------------------------
# 3. Invalid prefix types
# -------------------------------


@pytest.mark.parametrize('prefix', [123, -1, 45.6, [], {}])
def test_invalid_prefix_type_raises_error(prefix):
    """Ensure invalid prefix types raise a TypeError."""
    with pytest.raises(TypeError):
        RedisKeySchema(prefix=prefix)
