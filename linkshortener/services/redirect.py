"""Read path: resolve a shortcode to its destination URL.

Each resolution attempt ends in exactly one terminal state:

    Start -> NotFound   (ShortURLNotFoundError)
    Start -> Expired    (ShortURLExpiredError, hit counter untouched)
    Start -> Resolved   (hit counter incremented, target returned)

There are no retries at this layer.
"""

import logging

from linkshortener.dao.base import ShortURLBaseDAO
from linkshortener.dao.exceptions import ShortURLNotFoundError
from linkshortener.exceptions import ShortURLExpiredError
from linkshortener.services.events import EventSink, NullEventSink, emit_event
from linkshortener.utils.helpers import Clock, utcnow


logger = logging.getLogger(__name__)


class RedirectResolver:
    """Resolve shortcodes for redirects and count hits.

    Attributes:
        dao (ShortURLBaseDAO):
            Registry holding the short links.
        event_sink (EventSink):
            Receives an "Attempt to open short link" event per resolution.
        clock (Clock):
            Source of the current time, compared against `expires_at`.
    """

    def __init__(self, dao: ShortURLBaseDAO, *, event_sink: EventSink | None = None, clock: Clock | None = None):
        self.dao = dao
        self.event_sink = event_sink or NullEventSink()
        self.clock = clock or utcnow

    def resolve(self, shortcode: str) -> str:
        """Return the target URL of `shortcode` and count the hit.

        Raises:
            ShortURLNotFoundError:
                If the shortcode is not registered.
            ShortURLExpiredError:
                If the link expired. The record is kept and its hits are unchanged.
        """
        emit_event(self.event_sink, 'Attempt to open short link', {'shortcode': shortcode}, self.clock)

        short_url = self.dao.get(shortcode)
        if short_url is None:
            logger.info('Short URL not found.', extra={'shortcode': shortcode, 'event': 'redirect:not_found'})
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        if short_url.is_expired(self.clock()):
            logger.info('Short URL expired.', extra={'shortcode': shortcode, 'event': ShortURLExpiredError.error_code})
            raise ShortURLExpiredError(f"Short URL with code '{shortcode}' expired at {short_url.expires_at.isoformat()}.")

        hits = self.dao.hit(shortcode)
        logger.debug('Resolved short URL.', extra={'shortcode': shortcode, 'hits': hits})
        return short_url.target
