"""Short link allocation and resolution engine

The engine is stateless: every record lives in the shared key-value
backend, so any number of engine instances may serve requests concurrently.
Ordering and uniqueness reduce to the backend's atomic INCR.

Responsibilities:
    - Shorten URLs (dedup lookup, counter allocation, code encoding, record writes);
    - Resolve short codes back to their long URL;
    - Return the Detail Record of a short code.

Classes:
    ShortLinkEngine:
        Orchestrates a KeyValueBaseDAO, the code encoder and URL fingerprinting.

Example:
    >>> from shortlinker.dao import KeyValueRedisDAO
    >>> from shortlinker.engine import ShortLinkEngine

    >>> engine = ShortLinkEngine(KeyValueRedisDAO(prefix='shortlinker:dev'))
    >>> code = engine.shorten('https://www.baidu.com', 60)
    >>> engine.unshorten(code)
    'https://www.baidu.com'
    >>> engine.shortlink_info(code).expiration_in_minutes
    60

NOTE:
    Deduplication is optimistic. Two concurrent shorten() calls for the same
    never-seen URL may both miss the dedup lookup and allocate two distinct
    codes; both codes stay valid.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, UTC

from beartype import beartype

from shortlinker.constants import EMPTY_RECORD_SENTINELS
from shortlinker.dao.base import KeyValueBaseDAO
from shortlinker.dao.exceptions import BackendUnavailableError, CorruptRecordError, ShortLinkNotFoundError
from shortlinker.engine.encoder import encode
from shortlinker.engine.fingerprint import fingerprint
from shortlinker.models import URLDetailModel


logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class ShortLinkEngine:
    """Allocate and resolve short codes on top of a key-value backend

    Attributes:
        dao (KeyValueBaseDAO):
            Backend adapter. Its `keys` attribute provides the key schema.
        atomic_writes (bool):
            If True, the records of a new short code are written in a single
            transaction. Otherwise they are written one by one and a failure
            may leave a URL Record without its Detail Record.
        clock (Callable[[], datetime]):
            Source of the creation timestamp stored in Detail Records.

    Methods:
        shorten(url: str, ttl_minutes: int) -> str
        unshorten(code: str) -> str
        shortlink_info(code: str) -> URLDetailModel
    """

    def __init__(
        self,
        dao: KeyValueBaseDAO,
        *,
        atomic_writes: bool = False,
        clock: Callable[[], datetime] | None = None,
    ):
        self.dao = dao
        self.keys = dao.keys
        self.atomic_writes = atomic_writes
        self.clock = clock or _utcnow

    @beartype
    def shorten(self, url: str, ttl_minutes: int) -> str:
        """Return a short code for url, reusing a live one when available

        Procedure:
        - Step 1: Fingerprint the URL
        - Step 2: Look up an existing code by fingerprint (dedup)
        - Step 3: Allocate a new counter value
        - Step 4: Encode the counter value into a short code
        - Step 5: Write URL, fingerprint and Detail records with the TTL
        - Step 6: Return the short code

        A dedup hit returns the stored code without allocating and without
        refreshing any TTL.

        Args:
            url (str):
                Long URL, stored byte for byte.
            ttl_minutes (int):
                Lifetime of every record written for the new code.

        Returns:
            str: The short code.

        Raises:
            BackendUnavailableError:
                If the counter can't be incremented or a record can't be written.
                Records written before the failure are not rolled back unless
                atomic_writes is enabled.
            TypeError:
                If ttl_minutes is a bool.
            ValueError:
                If ttl_minutes is not positive.

        Example:
            >>> engine.shorten('https://www.baidu.com', 60)
            '8M0kX'
        """
        if isinstance(ttl_minutes, bool):
            raise TypeError(f'ttl_minutes must be an int, not bool (given value: {ttl_minutes!r}).')
        if ttl_minutes <= 0:
            raise ValueError(f'ttl_minutes must be positive (given value: {ttl_minutes}).')

        # 1- Fingerprint the URL
        url_hash = fingerprint(url)
        dedup_key = self.keys.urlhash_key(url_hash)

        # 2- Look up an existing mapping (a failed lookup means "no mapping")
        try:
            existing, found = self.dao.get_string(dedup_key)
        except BackendUnavailableError as e:
            logger.warning(
                'Dedup lookup failed. Allocating a new short code.',
                extra={'fingerprint': url_hash, 'error': str(e)},
            )
        else:
            if found and existing not in EMPTY_RECORD_SENTINELS:
                logger.debug('Dedup hit.', extra={'fingerprint': url_hash, 'shortlink': existing})
                return existing

        # 3- Allocate a new identifier (the INCR reply is the only source of truth)
        counter = self.dao.increment(self.keys.counter_key())

        # 4- Encode the identifier
        code = encode(counter)

        # 5- Write every record of the new code with the caller's TTL
        detail = URLDetailModel(url=url, created_at=self.clock(), expiration_in_minutes=ttl_minutes)
        records = {
            self.keys.shortlink_url_key(code): url,
            self.keys.urlhash_key(code): url,
            dedup_key: code,
            self.keys.shortlink_detail_key(code): detail.to_json(),
        }
        self.dao.set_many_with_ttl(records, timedelta(minutes=ttl_minutes), transaction=self.atomic_writes)

        # 6- Return the short code
        logger.info('Allocated new short code.', extra={'shortlink': code, 'ttl_minutes': ttl_minutes})
        return code

    @beartype
    def unshorten(self, code: str) -> str:
        """Resolve a short code to its long URL

        Raises:
            ShortLinkNotFoundError:
                If the code was never allocated or its URL Record expired.
            BackendUnavailableError:
                If the backend can't be read.

        Example:
            >>> engine.unshorten('8M0kX')
            'https://www.baidu.com'
        """
        url, found = self.dao.get_string(self.keys.shortlink_url_key(code))
        if not found:
            raise ShortLinkNotFoundError(f"Short link with code '{code}' not found.")
        return url

    @beartype
    def shortlink_info(self, code: str) -> URLDetailModel:
        """Return the Detail Record of a short code

        The Detail Record is read independently from the URL Record: either
        may be missing while the other exists.

        Raises:
            ShortLinkNotFoundError:
                If no Detail Record exists for the code.
            BackendUnavailableError:
                If the backend can't be read.
            CorruptRecordError:
                If the stored Detail Record can't be decoded.

        Example:
            >>> engine.shortlink_info('8M0kX')
            URLDetailModel(url='https://www.baidu.com', created_at=datetime(...), expiration_in_minutes=60)
        """
        raw, found = self.dao.get_string(self.keys.shortlink_detail_key(code))
        if not found:
            raise ShortLinkNotFoundError(f"Short link with code '{code}' not found.")

        try:
            return URLDetailModel.from_json(raw)
        except ValueError as e:
            raise CorruptRecordError(f"Detail record of short link '{code}' is malformed.") from e
