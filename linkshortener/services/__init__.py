from linkshortener.services.events import EventSink, NullEventSink, LoggingEventSink, emit_event
from linkshortener.services.shorten import ShortenService
from linkshortener.services.redirect import RedirectResolver


__all__ = [
    'EventSink',
    'NullEventSink',
    'LoggingEventSink',
    'emit_event',
    'ShortenService',
    'RedirectResolver',
]
