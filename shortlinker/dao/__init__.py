from shortlinker.dao.base import KeyValueBaseDAO
from shortlinker.dao.redis import KeyValueRedisDAO, RedisKeySchema


__all__ = [
    'KeyValueBaseDAO',
    'KeyValueRedisDAO',
    'RedisKeySchema',
]
