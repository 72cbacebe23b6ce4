"""Redis key naming for the short link registry."""

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
    """Key names of the short link registry.

        links:<shortcode>   one hash per link
        links:index         list of shortcodes in insertion order

    With a prefix (usually app_prefix(), e.g. "linkshortener:prod") every key
    becomes "<prefix>:<key>", so several deployments can share one database.
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def link_key(self, shortcode: str) -> str:
        return f'links:{shortcode}'

    @prefix_key
    def index_key(self) -> str:
        return 'links:index'
