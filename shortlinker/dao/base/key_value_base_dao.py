"""Abstract base class for key-value data access objects (DAOs).

This class establishes the contract the shortening engine depends on,
regardless of the underlying networked key-value store (e.g., Redis,
Valkey, KeyDB).

Responsibilities:
    - Provide an interface for atomic counters, string reads and TTL writes.
    - Distinguish an absent key (not an error) from an unreachable backend.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from datetime import timedelta
        >>> from shortlinker.dao import KeyValueRedisDAO

        >>> dao = KeyValueRedisDAO(...)

        >>> dao.increment('next.url.id')
        1

        >>> dao.set_with_ttl('shortlink:1:url', 'https://example.com', timedelta(minutes=60))
        >>> dao.get_string('shortlink:1:url')
        ('https://example.com', True)

        >>> dao.get_string('shortlink:2:url')
        (None, False)
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import timedelta


class KeyValueBaseDAO(ABC):
    """Interface for key-value data access objects (DAOs).

    Attributes:
        keys:
            Key schema helper (e.g. RedisKeySchema) generating the namespaced
            keys of every record.

    Methods:
        increment(key: str) -> int:
            Atomically add 1 to the integer stored at key and return the new value.
            Raises BackendUnavailableError on connection or write failure.

        get_string(key: str) -> tuple[str | None, bool]:
            Return the stored string and whether the key existed.
            Raises BackendUnavailableError on connection or read failure.

        set_with_ttl(key: str, value: str, ttl: timedelta) -> None:
            Unconditionally store value at key with an expiration.
            Raises BackendUnavailableError on connection or write failure.

        set_many_with_ttl(items: Mapping[str, str], ttl: timedelta, transaction: bool) -> None:
            Store several keys with the same expiration, optionally atomically.
            Raises BackendUnavailableError on connection or write failure.

        healthcheck(raise_error: bool = True) -> bool:
            Verify connectivity with the data store.

    Subclassing:
        Datastore-specific implementations (e.g., KeyValueRedisDAO) must extend
        this class and implement all abstract methods. Implementations must be
        safe for concurrent use without external locking.

    NOTE:
        - Records are expected to expire automatically. The DAO does not
          provide an interface to manually delete entries.
    """

    @abstractmethod
    def increment(self, key: str) -> int:
        """Atomically increment the integer stored at key.

        Absent keys are initialized to 0 before being incremented, so the
        first call for a key returns 1.

        Args:
            key (str):
                Key of the counter.

        Returns:
            int: The counter value after the increment.

        Raises:
            BackendUnavailableError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get_string(self, key: str) -> tuple[str | None, bool]:
        """Retrieve a string value by key.

        Args:
            key (str):
                Key of the value to be retrieved.

        Returns:
            tuple[str | None, bool]: (value, True) if the key exists, otherwise (None, False).

        Raises:
            BackendUnavailableError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def set_with_ttl(self, key: str, value: str, ttl: timedelta) -> None:
        """Store value at key, replacing any prior value, expiring after ttl.

        Args:
            key (str):
                Key to be written.

            value (str):
                Value to be stored.

            ttl (timedelta):
                Wall-clock time after which the key expires.

        Raises:
            BackendUnavailableError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def set_many_with_ttl(self, items: Mapping[str, str], ttl: timedelta, transaction: bool = False) -> None:
        """Store several key/value pairs sharing the same expiration.

        Args:
            items (Mapping[str, str]):
                Keys and values to be written, in write order.

            ttl (timedelta):
                Wall-clock time after which every key expires.

            transaction (bool):
                If True, all writes are applied atomically. Otherwise they are
                applied one by one and earlier writes are kept when a later
                write fails.

        Raises:
            BackendUnavailableError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def healthcheck(self, raise_error: bool = True) -> bool:
        """Verify connectivity with the data store.

        Args:
            raise_error (bool):
                If True, raise BackendUnavailableError on failure.

        Returns:
            bool: True if the data store is reachable, False otherwise.
        """
        pass
