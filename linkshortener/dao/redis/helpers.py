"""Helpers shared by the Redis-backed registry.

Functions:
    redis_address(client) -> str
        '<host>:<port>/<db>' of the server a client talks to, for error messages.
    handle_redis_connection_error(method) -> method
        Decorator: turn Redis connectivity failures into DataStoreError.
"""

import functools
from typing import Any
from collections.abc import Callable

import redis

from linkshortener.dao.exceptions import DataStoreError


__all__ = ['redis_address', 'handle_redis_connection_error']

REDIS_CONNECTIVITY_ERRORS = (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError)


def redis_address(client: redis.Redis) -> str:
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def handle_redis_connection_error[F: Callable[..., Any]](method: F) -> F:
    """Re-raise connection and timeout errors of a DAO method as DataStoreError

    The decorated method must belong to an object exposing its client as
    `self.redis`. Any other exception propagates unchanged.

    Example:
        >>> @handle_redis_connection_error
        ... def exists(self, shortcode):
        ...     return self.redis.exists(self.keys.link_key(shortcode))
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except REDIS_CONNECTIVITY_ERRORS as e:
            raise DataStoreError(f"Can't connect to Redis at {redis_address(self.redis)}.") from e

    return wrapper
