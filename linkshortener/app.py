"""Composition root: wire the registry, the shortcode generator and both services.

The presentation layer (HTTP handlers, CLI, ...) builds one Shortener at
start-up and calls its three entry points:

    - shorten(target, duration, alias)  -> ShortLinkModel   (creation)
    - list_links()                      -> [ShortURLModel]  (listing)
    - resolve(shortcode)                -> target URL       (redirect)

Example:
    >>> from linkshortener.app import create_shortener
    >>> with create_shortener({'active_backend': 'memory', 'base_url': 'https://sho.rt'}) as shortener:
    ...     link = shortener.shorten('https://example.com', 10)
    ...     shortener.resolve(link.shortcode)
    'https://example.com'
"""

import logging
from dataclasses import dataclass
from typing import Any

from linkshortener.models import ShortLinkModel, ShortURLModel
from linkshortener.dao import ShortURLBaseDAO, ShortURLMemoryDAO, ShortURLRedisDAO
from linkshortener.services import EventSink, NullEventSink, ShortenService, RedirectResolver
from linkshortener.utils.config import load_config, app_prefix, merge_defaults
from linkshortener.utils.constants import REDIS_BACKEND
from linkshortener.utils.helpers import Clock, utcnow
from linkshortener.utils.shortener import ShortcodeGenerator, random_source


logger = logging.getLogger(__name__)


@dataclass
class Shortener:
    dao: ShortURLBaseDAO
    shorten_service: ShortenService
    redirect_resolver: RedirectResolver

    def shorten(self, target: str, duration: Any = None, alias: str | None = None) -> ShortLinkModel:
        return self.shorten_service.shorten(target, duration, alias)

    def resolve(self, shortcode: str) -> str:
        return self.redirect_resolver.resolve(shortcode)

    def list_links(self) -> list[ShortURLModel]:
        return self.shorten_service.list_links()

    def close(self) -> None:
        self.dao.close()

    def __enter__(self) -> 'Shortener':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def create_dao(config: dict, clock: Clock) -> ShortURLBaseDAO:
    """Build the registry named by `config['active_backend']`."""
    if config['active_backend'] == REDIS_BACKEND:
        redis_config = {f'redis_{k}': v for k, v in config['redis'].items()}
        logger.debug('Using Redis as the short URL registry.', extra={'redisHost': redis_config.get('redis_host')})
        return ShortURLRedisDAO(clock=clock, prefix=app_prefix(), **redis_config)

    logger.debug('Using process memory as the short URL registry.')
    return ShortURLMemoryDAO(clock=clock)


def create_shortener(
    config: dict | None = None,
    *,
    clock: Clock | None = None,
    event_sink: EventSink | None = None,
    dao: ShortURLBaseDAO | None = None,
    generator: ShortcodeGenerator | None = None,
) -> Shortener:
    """Build a Shortener from configuration.

    Args:
        config (dict | None):
            Configuration document (see linkshortener.utils.config). Missing
            keys take their defaults. Loaded with load_config() when None.
        clock (Clock | None):
            Shared time source. Defaults to the current UTC time.
        event_sink (EventSink | None):
            Shared event sink. Defaults to NullEventSink.
        dao (ShortURLBaseDAO | None):
            Pre-built registry, overrides `config['active_backend']`.
        generator (ShortcodeGenerator | None):
            Pre-built shortcode generator, e.g. with a deterministic source.

    Raises:
        BadConfigurationError:
            If the configuration names an unsupported backend.
        DataStoreError:
            If the Redis registry cannot be reached.
    """
    config = load_config() if config is None else merge_defaults(config)
    clock = clock or utcnow
    event_sink = event_sink or NullEventSink()

    if dao is None:
        dao = create_dao(config, clock)
    generator = generator or ShortcodeGenerator(dao, source=random_source(length=int(config['shortcode_length'])))

    return Shortener(
        dao=dao,
        shorten_service=ShortenService(
            dao,
            generator,
            base_url=config['base_url'],
            event_sink=event_sink,
            clock=clock,
            default_duration=int(config['default_duration_minutes']),
        ),
        redirect_resolver=RedirectResolver(dao, event_sink=event_sink, clock=clock),
    )
