from shortlinker.dao.redis.redis_key_schema import RedisKeySchema
from shortlinker.dao.redis.mixins import RedisClientMixin
from shortlinker.dao.redis.key_value_redis_dao import KeyValueRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'KeyValueRedisDAO',
]
