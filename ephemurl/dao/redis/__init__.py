from ephemurl.dao.redis.redis_key_schema import RedisKeySchema
from ephemurl.dao.redis.mixins import RedisClientMixin
from ephemurl.dao.redis.mapping_redis_dao import MappingRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'MappingRedisDAO',
]
