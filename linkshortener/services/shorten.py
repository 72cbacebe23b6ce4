"""Write path: validate a shorten request and register a new short link.

Classes:
    ShortenService:
        Validate target URL, lifetime and optional custom alias, allocate a
        shortcode and insert the record into the registry.

Example:
    >>> from linkshortener.dao.memory import ShortURLMemoryDAO
    >>> from linkshortener.services import ShortenService

    >>> service = ShortenService(ShortURLMemoryDAO(), base_url='https://sho.rt')
    >>> link = service.shorten('https://example.com/blog/article-123', 5, 'blog123')
    >>> link.short_url
    'https://sho.rt/blog123'
"""

import logging
from typing import Any

from linkshortener.models import ShortLinkModel, ShortURLModel
from linkshortener.dao.base import ShortURLBaseDAO
from linkshortener.dao.exceptions import ShortURLAlreadyExistsError
from linkshortener.exceptions import InvalidURLError, InvalidAliasError, AliasTakenError, ShortcodeGenerationError
from linkshortener.services.events import EventSink, NullEventSink, emit_event
from linkshortener.utils.constants import DEFAULT_BASE_URL, DEFAULT_DURATION_MINUTES
from linkshortener.utils.helpers import Clock, utcnow, get_short_url, expiration_time
from linkshortener.utils.shortener import ShortcodeGenerator
from linkshortener.utils.validators import is_valid_url, is_valid_alias, normalize_alias, duration_minutes


logger = logging.getLogger(__name__)


class ShortenService:
    """Create short links.

    Attributes:
        dao (ShortURLBaseDAO):
            Registry the links are inserted into.
        generator (ShortcodeGenerator):
            Shortcode allocator used when no custom alias is given.
        base_url (str):
            Public base URL, short links are `<base_url>/<shortcode>`.
        event_sink (EventSink):
            Receives "Processing new short link" and "Short link created" events.
        clock (Clock):
            Source of the current time.
        default_duration (int):
            Lifetime in minutes used for non-positive or non-numeric durations.
    """

    def __init__(
        self,
        dao: ShortURLBaseDAO,
        generator: ShortcodeGenerator | None = None,
        *,
        base_url: str = DEFAULT_BASE_URL,
        event_sink: EventSink | None = None,
        clock: Clock | None = None,
        default_duration: int = DEFAULT_DURATION_MINUTES,
    ):
        self.dao = dao
        self.generator = generator or ShortcodeGenerator(dao)
        self.base_url = base_url
        self.event_sink = event_sink or NullEventSink()
        self.clock = clock or utcnow
        self.default_duration = default_duration

    def shorten(self, target: str, duration: Any = None, alias: str | None = None) -> ShortLinkModel:
        """Register a new short link.

        Procedure:
        - Step 1: Emit "Processing new short link"
        - Step 2: Validate the target URL
        - Step 3: Compute the expiration time
        - Step 4: Validate the custom alias, or generate a shortcode
        - Step 5: Insert the record (retry once with a fresh code on a lost race)
        - Step 6: Emit "Short link created"

        Args:
            target (str):
                Absolute destination URL.
            duration (Any):
                Lifetime in minutes. Non-positive or non-numeric values fall
                back to the default (30 minutes).
            alias (str | None):
                Optional custom shortcode. Surrounding whitespace is ignored,
                an empty alias means "generate one".

        Returns:
            ShortLinkModel: the registered short link

        Raises:
            InvalidURLError:
                If `target` is not an absolute URL.
            InvalidAliasError:
                If `alias` is not 1-15 alphanumeric characters.
            AliasTakenError:
                If `alias` is already registered.
            ShortcodeGenerationError:
                If a generated shortcode collided twice on insert.
        """
        # 1- Record the raw request
        emit_event(self.event_sink, 'Processing new short link', {'target': target, 'duration': duration, 'alias': alias}, self.clock)

        # 2- Validate target URL
        if not is_valid_url(target):
            logger.info('Rejected invalid target URL.', extra={'target': target, 'event': InvalidURLError.error_code})
            raise InvalidURLError(f"Invalid URL '{target}' (expected an absolute URL such as https://example.com).")

        # 3- Compute expiration time
        created_at = self.clock()
        expires_at = expiration_time(created_at, duration_minutes(duration, default=self.default_duration))

        # 4 & 5- Resolve the shortcode and insert the record
        alias = normalize_alias(alias)
        if alias is not None:
            short_url = self._insert_alias(alias, target, created_at, expires_at)
        else:
            short_url = self._insert_generated(target, created_at, expires_at)

        # 6- Record the new link
        # fmt: off
        emit_event(self.event_sink, 'Short link created', {
            'shortcode': short_url.shortcode,
            'target': target,
            'expires_at': expires_at.isoformat(),
        }, self.clock)
        # fmt: on
        logger.info('Short link created.', extra={'shortcode': short_url.shortcode, 'target': target})

        return ShortLinkModel(
            shortcode=short_url.shortcode,
            short_url=get_short_url(short_url.shortcode, self.base_url),
            target=target,
            created_at=short_url.created_at,
            expires_at=short_url.expires_at,
        )

    def list_links(self) -> list[ShortURLModel]:
        """Return every registered link in insertion order."""
        links = self.dao.all()
        emit_event(self.event_sink, 'Accessed short link records', {'count': len(links)}, self.clock)
        return links

    def _insert_alias(self, alias, target, created_at, expires_at) -> ShortURLModel:
        if not is_valid_alias(alias):
            raise InvalidAliasError(f"Invalid alias '{alias}' (alias must be alphanumeric, max 15 characters).")
        if self.dao.exists(alias):
            raise AliasTakenError(f"Alias '{alias}' is already in use.")

        try:
            return self.dao.insert(alias, target, expires_at, created_at=created_at)
        except ShortURLAlreadyExistsError as e:
            # Lost a race against a concurrent claim of the same alias
            raise AliasTakenError(f"Alias '{alias}' is already in use.") from e

    def _insert_generated(self, target, created_at, expires_at) -> ShortURLModel:
        shortcode = self.generator.generate()
        try:
            return self.dao.insert(shortcode, target, expires_at, created_at=created_at)
        except ShortURLAlreadyExistsError:
            logger.warning('Generated shortcode was claimed concurrently. Retrying once.', extra={'shortcode': shortcode})

        shortcode = self.generator.generate()
        try:
            return self.dao.insert(shortcode, target, expires_at, created_at=created_at)
        except ShortURLAlreadyExistsError as e:
            logger.error('Generated shortcode collided twice.', extra={'shortcode': shortcode})
            raise ShortcodeGenerationError(f"Unable to register a generated shortcode for '{target}'.") from e
