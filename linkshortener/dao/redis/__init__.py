from linkshortener.dao.redis.redis_key_schema import RedisKeySchema
from linkshortener.dao.redis.short_url_redis_dao import ShortURLRedisDAO
from linkshortener.dao.redis.mixins import RedisClientMixin


__all__ = [
    'RedisKeySchema',
    'ShortURLRedisDAO',
    'RedisClientMixin',
]
