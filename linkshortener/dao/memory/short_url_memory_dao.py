"""In-memory Data Access Object (DAO) implementation for shortened URLs

This module provides a thread-safe, process-local implementation of
ShortURLBaseDAO. It is the default registry and the one used in tests.

Responsibilities:
    - Insert and retrieve short URLs from an insertion-ordered dict;
    - Serialize check-then-insert so concurrent claims of a shortcode never both succeed;
    - Increment per-link hit counters without lost updates.

Classes:
    ShortURLMemoryDAO:
        DAO for storing and retrieving ShortURLModel in process memory.

Example:
    >>> from datetime import datetime, timedelta, UTC
    >>> from linkshortener.dao.memory import ShortURLMemoryDAO

    >>> dao = ShortURLMemoryDAO()
    >>> dao.insert('abc123', 'https://example.com/page', datetime.now(UTC) + timedelta(minutes=5))
    ShortURLModel(target='https://example.com/page', shortcode='abc123', ...)
    >>> dao.exists('abc123')
    True
    >>> dao.hit('abc123')
    1
"""

import threading
import dataclasses
from datetime import datetime

from beartype import beartype

from linkshortener.models import ShortURLModel
from linkshortener.dao.base import ShortURLBaseDAO
from linkshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError
from linkshortener.utils.helpers import Clock, utcnow


class ShortURLMemoryDAO(ShortURLBaseDAO):
    """Thread-safe in-memory registry of short URL mappings

    Records are immutable ShortURLModel snapshots kept in a dict (which
    preserves insertion order). A single lock guards the dict; every method
    holds it for one dict operation only, so no call blocks for longer than
    a lookup or an assignment.

    Attributes:
        clock (Clock):
            Callable returning the current time, used for `created_at`.
    """

    def __init__(self, clock: Clock | None = None):
        self.clock = clock or utcnow
        self._records: dict[str, ShortURLModel] = {}
        self._lock = threading.Lock()

    @beartype
    def exists(self, shortcode: str, **kwargs) -> bool:
        with self._lock:
            return shortcode in self._records

    @beartype
    def insert(self, shortcode: str, target: str, expires_at: datetime, created_at: datetime | None = None, **kwargs) -> ShortURLModel:
        """Insert a short URL mapping

        Raises:
            ShortURLAlreadyExistsError:
                If a short URL with the same shortcode already exists.
            ValueError:
                If `expires_at` is not later than `created_at`.
        """
        created_at = created_at or self.clock()
        if expires_at <= created_at:
            raise ValueError(f"Expiration time must be later than creation time (shortcode '{shortcode}').")

        short_url = ShortURLModel(target=target, shortcode=shortcode, created_at=created_at, expires_at=expires_at)
        with self._lock:
            if shortcode in self._records:
                raise ShortURLAlreadyExistsError(f"Short URL with code '{shortcode}' already exists.")
            self._records[shortcode] = short_url
        return short_url

    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel | None:
        with self._lock:
            return self._records.get(shortcode)

    @beartype
    def hit(self, shortcode: str, **kwargs) -> int:
        """Increment the hit counter for a short URL

        The stored snapshot is replaced by a copy with `hits + 1` inside the
        lock, so concurrent hits on the same shortcode are never lost.

        Raises:
            ShortURLNotFoundError:
                If no short URL with the given shortcode exists.
        """
        with self._lock:
            short_url = self._records.get(shortcode)
            if short_url is None:
                raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
            short_url = dataclasses.replace(short_url, hits=short_url.hits + 1)
            self._records[shortcode] = short_url
        return short_url.hits

    def all(self, **kwargs) -> list[ShortURLModel]:
        with self._lock:
            return list(self._records.values())

    def close(self) -> None:
        with self._lock:
            self._records.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
