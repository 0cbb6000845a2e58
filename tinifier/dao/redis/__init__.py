from tinifier.dao.redis.redis_key_schema import RedisKeySchema
from tinifier.dao.redis.mixins import RedisClientMixin
from tinifier.dao.redis.url_entry_redis_dao import UrlEntryRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'UrlEntryRedisDAO',
]
