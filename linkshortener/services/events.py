"""Event sinks receiving structured service events.

An event sink is any object with a `log(event: EventModel) -> None` method.
Sinks are fire-and-forget: services call them through `emit_event()`, which
guarantees a failing sink never breaks the operation that emitted the event.

Classes:
    EventSink:
        Protocol implemented by every sink.
    NullEventSink:
        Default sink, discards every event.
    LoggingEventSink:
        Forwards events to a standard library logger.

Functions:
    emit_event(sink, msg, payload, clock) -> None:
        Build an EventModel and hand it to `sink`, swallowing sink failures.
"""

import logging
from typing import Any, Protocol, runtime_checkable

from linkshortener.models import EventModel
from linkshortener.utils.helpers import Clock, utcnow


logger = logging.getLogger(__name__)


@runtime_checkable
class EventSink(Protocol):
    def log(self, event: EventModel) -> None: ...


class NullEventSink:
    def log(self, event: EventModel) -> None:
        return None


class LoggingEventSink:
    """Forward events to `logging`, with the payload attached as `extra`.

    Example:
        >>> sink = LoggingEventSink()
        >>> sink.log(EventModel(msg='Short link created', payload={'shortcode': 'abc123'}, time=utcnow()))
        # {"message": "Short link created", "payload": {"shortcode": "abc123"}, "eventTime": "...", ...}
    """

    def __init__(self, logger_: logging.Logger | None = None, level: int = logging.INFO):
        self.logger = logger_ or logging.getLogger('linkshortener.events')
        self.level = level

    def log(self, event: EventModel) -> None:
        self.logger.log(self.level, event.msg, extra={'payload': event.payload, 'eventTime': event.time.isoformat()})


def emit_event(sink: EventSink, msg: str, payload: dict[str, Any], clock: Clock = utcnow) -> None:
    try:
        sink.log(EventModel(msg=msg, payload=payload, time=clock()))
    except Exception:
        # Sinks must not affect the calling operation
        logger.exception('Event sink failed to record event.', extra={'eventMsg': msg})
