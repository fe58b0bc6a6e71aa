"""Redis mixin providing shared client initialization and connectivity checks.

Responsibilities:
    - Initialize Redis client (with bounded per-call socket timeouts)
    - Healthcheck Redis client

Classes:
    - RedisClientMixin: Base mixin to inject Redis key management, client setup & healthcheck.

Example:
    Typical usage with a DAO implementation:

        >>> class KeyValueRedisDAO(RedisClientMixin, KeyValueBaseDAO):
        ...     pass
        ...
        >>> dao = KeyValueRedisDAO(prefix="shortlinker:prod")
        >>> dao.healthcheck()
        True
"""

from typing import Optional

import redis

from shortlinker.constants import RedisDefaults
from shortlinker.dao.redis.redis_key_schema import RedisKeySchema
from shortlinker.dao.redis.helpers import describe_connection
from shortlinker.dao.exceptions import BackendUnavailableError


class RedisClientMixin:
    """Mixin Redis client setup and health check for Redis-backed DAOs.

    Attributes:
        redis (redis.Redis):
            Active Redis client instance used by subclasses.

        keys (RedisKeySchema):
            Helper class for generating namespaced Redis key names.

    Methods:
        healthcheck(raise_error: bool = True) -> bool:
            Ping Redis to verify connectivity.
            Optionally raise a BackendUnavailableError if unreachable.
    """

    def __init__(
        self,
        redis_host: Optional[str] = RedisDefaults.HOST,
        redis_port: Optional[int] = RedisDefaults.PORT,
        redis_db: Optional[int] = RedisDefaults.DB,
        redis_decode_responses: Optional[bool] = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_socket_timeout: Optional[float] = RedisDefaults.SOCKET_TIMEOUT,
        redis_socket_connect_timeout: Optional[float] = RedisDefaults.SOCKET_CONNECT_TIMEOUT,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        """Initialize a Redis-based DAO

        The option is given to either use an existing Redis client instance or
        create one via the appropriate Redis connection parameters. The backend
        is not contacted here; call healthcheck() to verify connectivity.

        Args:
            redis_host (Optional[str]):
                Hostname of the Redis server. Defaults to 'localhost'.

            redis_port (Optional[int]):
                Redis server port. Defaults to 6379.

            redis_db (Optional[int]):
                Redis database index. Defaults to 0.

            redis_decode_responses (Optional[bool]):
                If True, decodes Redis responses. Defaults to True.

            redis_username (Optional[str]):
                Username for Redis authentication (if required).

            redis_password (Optional[str]):
                Password for Redis authentication (if required).

            redis_socket_timeout (Optional[float]):
                Deadline in seconds for every Redis command. Defaults to 5.

            redis_socket_connect_timeout (Optional[float]):
                Deadline in seconds for establishing a connection. Defaults to 5.

            redis_client (Optional[redis.Redis]):
                Pre-initialized Redis client. If None, a new client is created.

            prefix (Optional[str]):
                Namespace prefix for all Redis keys, e.g. 'app:env'.
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                decode_responses=redis_decode_responses,
                username=redis_username,
                password=redis_password,
                socket_timeout=redis_socket_timeout,
                socket_connect_timeout=redis_socket_connect_timeout,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

    def healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis to healthcheck connectivity

        Args:
            raise_error (bool):
                If True, raises BackendUnavailableError on failure. Defaults to True.

        Returns:
            bool:
                True if Redis is reachable, False otherwise (only if raise_error=False).

        Raises:
            BackendUnavailableError:
                If Redis is unreachable or rejects PING and raise_error=True.

        Example:
            >>> self.healthcheck()
            True
        """
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            if raise_error:
                raise BackendUnavailableError(
                    f"Can't connect to Redis at {describe_connection(self.redis)}. Check the provided configuration parameters."
                ) from e
            return False
        except redis.exceptions.RedisError as e:
            # e.g. NOPERM when the ACL user lacks +ping
            if raise_error:
                raise BackendUnavailableError(f"Redis at {describe_connection(self.redis)} rejected PING: {e}") from e
            return False
        else:
            return True
