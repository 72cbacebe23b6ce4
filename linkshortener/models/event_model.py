from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class EventModel:
    """Structured event handed to an event sink.

    Attributes:
        msg (str):
            Human readable event name, e.g. "Short link created".
        payload (dict[str, Any]):
            Structured event data.
        time (datetime):
            Moment the event was emitted.
    """

    msg: str
    payload: dict[str, Any]
    time: datetime
