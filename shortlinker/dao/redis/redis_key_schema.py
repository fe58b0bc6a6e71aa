import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for short link records.

    An optional prefix can be provided to namespace all generated keys.
    Without a prefix the keys follow the plain layout shared by every
    engine instance, e.g. "shortlink:abc:url".
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def counter_key(self) -> str:
        return 'next.url.id'

    @prefix_key
    def shortlink_url_key(self, short_code: str) -> str:
        return f'shortlink:{short_code}:url'

    @prefix_key
    def urlhash_key(self, ident: str) -> str:
        # ident is either a short code (code -> url index) or a URL fingerprint (dedup index)
        return f'urlhash:{ident}:url'

    @prefix_key
    def shortlink_detail_key(self, short_code: str) -> str:
        return f'shortlink:{short_code}:detail'
