import logging
from typing import Any

import redis

from shortlinker.dao.redis import KeyValueRedisDAO
from shortlinker.engine.outcome import Outcome, capture
from shortlinker.engine.shortener import ShortLinkEngine


logger = logging.getLogger(__name__)


def initialize_engine(
    redis_config: dict[str, Any],
    *,
    prefix: str | None = None,
    atomic_writes: bool = False,
    redis_client: redis.Redis | None = None,
) -> Outcome[ShortLinkEngine]:
    """Build a ShortLinkEngine and verify the backend is reachable

    The caller decides what to do with an unreachable backend (abort, retry,
    respond with an error); this function never exits the process.

    Args:
        redis_config (dict[str, Any]):
            Redis connection parameters as accepted by RedisClientMixin
            (e.g. {'redis_host': 'localhost', 'redis_port': 6379}).
        prefix (str | None):
            Namespace prefix for all keys.
        atomic_writes (bool):
            Write the records of a new short code in a single transaction.
        redis_client (redis.Redis | None):
            Pre-initialized Redis client.

    Returns:
        Outcome[ShortLinkEngine]:
            SUCCESS with the engine, or BACKEND_UNAVAILABLE with the error.

    Example:
        >>> outcome = initialize_engine({'redis_host': 'localhost'}, prefix='shortlinker:dev')
        >>> outcome.ok
        True
        >>> outcome.value.shorten('https://example.com', 5)
        '1'
    """
    dao = KeyValueRedisDAO(**redis_config, redis_client=redis_client, prefix=prefix)

    outcome = capture(dao.healthcheck)
    if not outcome.ok:
        logger.error('Key-value backend is unreachable.', extra={'error': str(outcome.error)})
        return Outcome.failure(outcome.error)

    return Outcome.success(ShortLinkEngine(dao, atomic_writes=atomic_writes))
