from datetime import datetime, timedelta, UTC

import pytest

from linkshortener.dao.memory import ShortURLMemoryDAO


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class RecordingEventSink:
    def __init__(self):
        self.events = []

    def log(self, event) -> None:
        self.events.append(event)

    @property
    def messages(self) -> list[str]:
        return [event.msg for event in self.events]


@pytest.fixture
def now() -> datetime:
    return datetime(2026, 10, 19, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def clock(now) -> FakeClock:
    return FakeClock(now)


@pytest.fixture
def event_sink() -> RecordingEventSink:
    return RecordingEventSink()


@pytest.fixture
def memory_dao(clock) -> ShortURLMemoryDAO:
    return ShortURLMemoryDAO(clock=clock)
