"""Data Access Object (DAO) implementation for managing shortened URLs in Redis

This module provides a Redis-based implementation of ShortURLBaseDAO. It keeps
the registry contract of the in-memory DAO when the registry lives outside the
process (shared by several workers).

Data layout:
    <prefix>:links:<shortcode>   HASH  target, created_at, expires_at, hits
    <prefix>:links:index         LIST  shortcodes in insertion order

Responsibilities:
    - Conditionally insert short URLs (WATCH/MULTI/EXEC);
    - Retrieve and list short URLs;
    - Atomically increment per-link hit counters (HINCRBY);
    - Raise appropriate DAO exceptions on Redis connectivity issues.

Classes:
    ShortURLRedisDAO:
        DAO for storing and retrieving ShortURLModel in a Redis datastore.

Example:
    >>> from datetime import datetime, timedelta, UTC
    >>> from linkshortener.dao.redis import ShortURLRedisDAO

    >>> dao = ShortURLRedisDAO(prefix="app:dev")
    >>> dao.insert("abc123", "https://example.com/page", datetime.now(UTC) + timedelta(minutes=30))
    ShortURLModel(target='https://example.com/page', shortcode='abc123', ...)

    >>> dao.get("abc123").target
    'https://example.com/page'
    >>> dao.hit("abc123")
    1
"""

from datetime import datetime

import redis
from beartype import beartype

from linkshortener.models import ShortURLModel
from linkshortener.dao.base import ShortURLBaseDAO
from linkshortener.dao.redis.mixins import RedisClientMixin
from linkshortener.dao.redis.helpers import handle_redis_connection_error
from linkshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError
from linkshortener.utils.helpers import Clock, utcnow


def _decode(value):
    return value.decode('utf-8') if isinstance(value, bytes) else value


class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short URL mappings

    This class implements the ShortURLBaseDAO interface using Redis as a data store.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
        clock (Clock):
            Callable returning the current time, used for `created_at`.

    NOTE:
        - Link hashes carry no Redis TTL. Expired links stay listed and
          resolvable to an "expired" answer, like in the in-memory registry.
    """

    def __init__(self, clock: Clock | None = None, **kwargs):
        self.clock = clock or utcnow
        super().__init__(**kwargs)

    @handle_redis_connection_error
    @beartype
    def exists(self, shortcode: str, **kwargs) -> bool:
        return bool(self.redis.exists(self.keys.link_key(shortcode)))

    @handle_redis_connection_error
    @beartype
    def insert(self, shortcode: str, target: str, expires_at: datetime, created_at: datetime | None = None, **kwargs) -> ShortURLModel:
        """Insert a short URL mapping into Redis

        The link key is WATCHed before the existence check. If another client
        creates it between the check and EXEC, the transaction is discarded
        and the insert fails like any other duplicate.

        Raises:
            ShortURLAlreadyExistsError:
                If a short URL with the same shortcode already exists.
            ValueError:
                If `expires_at` is not later than `created_at`.
            DataStoreError:
                If a Redis connection issue occurs during the transaction.
        """
        created_at = created_at or self.clock()
        if expires_at <= created_at:
            raise ValueError(f"Expiration time must be later than creation time (shortcode '{shortcode}').")

        link_key = self.keys.link_key(shortcode)
        with self.redis.pipeline(transaction=True) as pipe:
            try:
                pipe.watch(link_key)
                if pipe.exists(link_key):
                    raise ShortURLAlreadyExistsError(f"Short URL with code '{shortcode}' already exists.")

                pipe.multi()
                # fmt: off
                pipe.hset(link_key, mapping={
                    'target': target,
                    'created_at': created_at.isoformat(),
                    'expires_at': expires_at.isoformat(),
                    'hits': 0,
                })
                # fmt: on
                pipe.rpush(self.keys.index_key(), shortcode)
                pipe.execute()
            except redis.exceptions.WatchError as e:
                raise ShortURLAlreadyExistsError(f"Short URL with code '{shortcode}' already exists.") from e

        return ShortURLModel(target=target, shortcode=shortcode, created_at=created_at, expires_at=expires_at)

    @handle_redis_connection_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel | None:
        data = self.redis.hgetall(self.keys.link_key(shortcode))
        if not data:
            return None
        return self._to_model(shortcode, data)

    @handle_redis_connection_error
    @beartype
    def hit(self, shortcode: str, **kwargs) -> int:
        """Increment the hit counter for a short URL

        NOTE: HINCRBY would create a missing hash, hence the existence check.
              Link hashes are never deleted, so the check cannot go stale.

        Raises:
            ShortURLNotFoundError:
                If no short URL with the given shortcode exists.
            DataStoreError:
                If Redis connectivity issues occur.
        """
        link_key = self.keys.link_key(shortcode)
        if not self.redis.exists(link_key):
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
        return int(self.redis.hincrby(link_key, 'hits', 1))

    @handle_redis_connection_error
    def all(self, **kwargs) -> list[ShortURLModel]:
        shortcodes = [_decode(code) for code in self.redis.lrange(self.keys.index_key(), 0, -1)]
        if not shortcodes:
            return []

        with self.redis.pipeline(transaction=False) as pipe:
            for shortcode in shortcodes:
                pipe.hgetall(self.keys.link_key(shortcode))
            rows = pipe.execute()

        return [self._to_model(shortcode, data) for shortcode, data in zip(shortcodes, rows) if data]

    @staticmethod
    def _to_model(shortcode: str, data: dict) -> ShortURLModel:
        data = {_decode(k): _decode(v) for k, v in data.items()}
        return ShortURLModel(
            target=data['target'],
            shortcode=shortcode,
            created_at=datetime.fromisoformat(data['created_at']),
            expires_at=datetime.fromisoformat(data['expires_at']),
            hits=int(data.get('hits', 0)),
        )
