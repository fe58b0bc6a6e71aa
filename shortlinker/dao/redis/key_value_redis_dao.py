"""Data Access Object (DAO) implementation of the key-value backend over Redis

This module provides a Redis-based implementation of KeyValueBaseDAO, the
primitive operations the shortening engine is built upon.

Responsibilities:
    - Atomically increment counters (INCR);
    - Read string values while telling "absent" apart from "unreachable";
    - Write values with a per-key TTL (SET EX), one by one or in a MULTI/EXEC transaction;
    - Translate redis-py errors into BackendUnavailableError.

Classes:
    KeyValueRedisDAO:
        DAO exposing atomic increment, get and set-with-TTL over a Redis datastore.

Example:
    >>> from datetime import timedelta
    >>> from shortlinker.dao.redis import KeyValueRedisDAO

    >>> dao = KeyValueRedisDAO(prefix="shortlinker:dev")
    >>> dao.healthcheck()
    True

    >>> dao.increment(dao.keys.counter_key())
    1
    >>> dao.set_with_ttl(dao.keys.shortlink_url_key('1'), 'https://example.com', timedelta(minutes=5))
    >>> dao.get_string(dao.keys.shortlink_url_key('1'))
    ('https://example.com', True)
"""

from collections.abc import Mapping
from datetime import timedelta

from beartype import beartype

from shortlinker.dao.base import KeyValueBaseDAO
from shortlinker.dao.redis.mixins import RedisClientMixin
from shortlinker.dao.redis.helpers import handle_redis_connection_error


class KeyValueRedisDAO(RedisClientMixin, KeyValueBaseDAO):
    """Redis-based Data Access Object (DAO) for key-value primitives

    This class implements the KeyValueBaseDAO interface using Redis as a data store.
    redis-py clients draw connections from a thread-safe pool, so a single
    instance may be shared by concurrent callers.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        increment(key: str) -> int:
            INCR key and return the new value.
        get_string(key: str) -> tuple[str | None, bool]:
            GET key, reporting whether it exists.
        set_with_ttl(key: str, value: str, ttl: timedelta) -> None:
            SET key value EX ttl.
        set_many_with_ttl(items: Mapping[str, str], ttl: timedelta, transaction: bool = False) -> None:
            SET several keys with the same TTL, optionally inside MULTI/EXEC.

        All methods raise BackendUnavailableError on connectivity issues with Redis.
    """

    @handle_redis_connection_error
    @beartype
    def increment(self, key: str) -> int:
        """Atomically increment a counter

        Args:
            key (str):
                Counter key. Redis initializes absent keys to 0 before INCR.

        Returns:
            int:
                The counter value after the increment.

        Example:
            >>> dao.increment('next.url.id')
            124
        """
        return int(self.redis.incr(key))

    @handle_redis_connection_error
    @beartype
    def get_string(self, key: str) -> tuple[str | None, bool]:
        """Retrieve a string value

        Args:
            key (str):
                Key to be read.

        Returns:
            tuple[str | None, bool]:
                (value, True) when the key exists, (None, False) otherwise.

        Example:
            >>> dao.get_string('shortlink:abc:url')
            ('https://example.com', True)
            >>> dao.get_string('shortlink:doesNotExist:url')
            (None, False)
        """
        value = self.redis.get(key)
        if value is None:
            return None, False
        if isinstance(value, bytes):
            value = value.decode('utf-8')
        return value, True

    @handle_redis_connection_error
    @beartype
    def set_with_ttl(self, key: str, value: str, ttl: timedelta) -> None:
        """Store a value with an expiration

        Args:
            key (str):
                Key to be written. Any prior value is replaced.
            value (str):
                Value to be stored.
            ttl (timedelta):
                Time-to-live of the key.

        Example:
            >>> dao.set_with_ttl('shortlink:abc:url', 'https://example.com', timedelta(minutes=60))
        """
        self.redis.set(key, value, ex=ttl)

    @handle_redis_connection_error
    @beartype
    def set_many_with_ttl(self, items: Mapping[str, str], ttl: timedelta, transaction: bool = False) -> None:
        """Store several values sharing the same expiration

        Args:
            items (Mapping[str, str]):
                Keys and values to be written, in write order.
            ttl (timedelta):
                Time-to-live of every key.
            transaction (bool):
                If True, the SET commands are sent as a single MULTI/EXEC
                transaction. Otherwise they are sent one by one and a failure
                leaves the earlier keys in place.

        Example:
            >>> dao.set_many_with_ttl({'a': '1', 'b': '2'}, timedelta(minutes=5), transaction=True)
        """
        if not transaction:
            for key, value in items.items():
                self.redis.set(key, value, ex=ttl)
            return

        with self.redis.pipeline(transaction=True) as pipe:
            for key, value in items.items():
                pipe.set(key, value, ex=ttl)
            pipe.execute()
