import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from shortlinker.dao.exceptions import BackendUnavailableError


__all__ = ['handle_redis_connection_error', 'describe_connection']

F = TypeVar('F', bound=Callable[..., Any])


def describe_connection(client: redis.Redis) -> str:
    """Return a '<host>:<port>/<db>' description of a Redis client's target"""
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def handle_redis_connection_error[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle backend errors

    Connection errors, timeouts and unexpected server replies are all
    reported as BackendUnavailableError. No retry is attempted.

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises BackendUnavailableError on Redis failures.

    Example:
        >>> @handle_redis_connection_error
        ... def get_count(self):
        ...     return self.redis.get('count')
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except redis.exceptions.ConnectionError as e:
            raise BackendUnavailableError(f"Can't connect to Redis at {describe_connection(self.redis)}.") from e
        except redis.exceptions.TimeoutError as e:
            raise BackendUnavailableError(f'Redis at {describe_connection(self.redis)} timed out.') from e
        except redis.exceptions.RedisError as e:
            raise BackendUnavailableError(f'Redis at {describe_connection(self.redis)} failed: {e}') from e

    return wrapper
