import threading
from collections.abc import Mapping
from datetime import datetime, timedelta, UTC
from unittest.mock import MagicMock

import pytest

from shortlinker.dao.base import KeyValueBaseDAO
from shortlinker.dao.exceptions import BackendUnavailableError
from shortlinker.dao.redis import RedisKeySchema


class InMemoryKeyValueDAO(KeyValueBaseDAO):
    """Thread-safe dict-backed test double of the key-value contract.

    Expiry follows datetime.now(UTC), so freezegun controls it. Method names
    listed in `failing` raise BackendUnavailableError.
    """

    def __init__(self, prefix: str | None = None):
        self.keys = RedisKeySchema(prefix=prefix)
        self.failing: set[str] = set()
        self.store: dict[str, tuple[str, datetime | None]] = {}
        self._lock = threading.Lock()

    def _check(self, method: str) -> None:
        if method in self.failing:
            raise BackendUnavailableError(f'{method} failed')

    def _live(self, key: str) -> str | None:
        value, expires_at = self.store.get(key, (None, None))
        if expires_at is not None and datetime.now(UTC) >= expires_at:
            del self.store[key]
            return None
        return value

    def increment(self, key: str) -> int:
        self._check('increment')
        with self._lock:
            value = int(self._live(key) or 0) + 1
            self.store[key] = (str(value), None)
            return value

    def get_string(self, key: str) -> tuple[str | None, bool]:
        self._check('get_string')
        with self._lock:
            value = self._live(key)
            return value, value is not None

    def set_with_ttl(self, key: str, value: str, ttl: timedelta) -> None:
        self._check('set_with_ttl')
        with self._lock:
            self.store[key] = (value, datetime.now(UTC) + ttl)

    def set_many_with_ttl(self, items: Mapping[str, str], ttl: timedelta, transaction: bool = False) -> None:
        self._check('set_many_with_ttl')
        for key, value in items.items():
            self.set_with_ttl(key, value, ttl)

    def healthcheck(self, raise_error: bool = True) -> bool:
        if 'healthcheck' in self.failing:
            if raise_error:
                raise BackendUnavailableError('healthcheck failed')
            return False
        return True


@pytest.fixture
def memory_dao() -> InMemoryKeyValueDAO:
    return InMemoryKeyValueDAO()


@pytest.fixture
def mock_dao() -> KeyValueBaseDAO:
    """Mock KeyValueBaseDAO with an empty backend and a predictable counter."""
    dao = MagicMock(spec=KeyValueBaseDAO)
    dao.keys = RedisKeySchema()
    dao.get_string.return_value = (None, False)
    dao.increment.return_value = 125
    return dao
