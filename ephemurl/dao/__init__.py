from ephemurl.dao.base import MappingBaseDAO
from ephemurl.dao.redis import MappingRedisDAO


__all__ = [
    'MappingBaseDAO',
    'MappingRedisDAO',
]
