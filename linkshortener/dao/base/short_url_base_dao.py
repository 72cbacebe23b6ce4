"""Abstract base class for ShortURL data access objects (DAOs).

The DAO is the registry of shortcode -> ShortURLModel mappings. This class
establishes a consistent contract for all implementations, regardless of the
underlying storage mechanism (in-process memory, Redis, ...).

Responsibilities:
    - Provide an interface for inserting, retrieving and listing ShortURLModel objects.
    - Own the only mutation of a stored record after creation: the hit counter.
    - Standardize error handling across multiple data store implementations.

Concurrency contract (every implementation must honor it):
    - Two concurrent inserts of the same shortcode never both succeed; the
      loser raises ShortURLAlreadyExistsError.
    - Concurrent hit() calls on the same shortcode never lose increments.
    - get() and all() never block on unrelated writes; all() may observe a hit
      counter that is one increment behind an in-flight hit().

Example:
    Typical usage with a datastore-specific implementation:

        >>> from datetime import datetime, timedelta, UTC
        >>> from linkshortener.dao.memory import ShortURLMemoryDAO

        >>> dao = ShortURLMemoryDAO()
        >>> dao.insert('a1b2c3', 'https://example.com/blog/article-123', datetime.now(UTC) + timedelta(minutes=30))
        ShortURLModel(target='https://example.com/blog/article-123', shortcode='a1b2c3', ...)

        >>> dao.get('a1b2c3').hits
        0
        >>> dao.hit('a1b2c3')
        1
"""

from abc import ABC, abstractmethod
from datetime import datetime

from linkshortener.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        exists(shortcode: str) -> bool:
            True if a record with that shortcode is stored (expired or not).

        insert(shortcode, target, expires_at, created_at=None) -> ShortURLModel:
            Store a new record with zero hits.
            Raises ShortURLAlreadyExistsError if the shortcode already exists.

        get(shortcode: str) -> ShortURLModel | None:
            Retrieve a record without mutating it. None if not found.

        hit(shortcode: str) -> int:
            Atomically increment the hit counter and return its new value.
            Raises ShortURLNotFoundError if the shortcode does not exist.

        all() -> list[ShortURLModel]:
            Snapshot of all records in insertion order.

        close() -> None:
            Release resources held by the data store.

    All methods raise DataStoreError on connection or I/O failures of the
    underlying store.

    NOTE:
        - Records are never deleted. Expiration is enforced by the caller
          at read time, so the registry grows without bound.
    """

    @abstractmethod
    def exists(self, shortcode: str, **kwargs) -> bool:
        """Check whether a shortcode is registered.

        Args:
            shortcode (str):
                The shortcode to look up.

        Returns:
            bool: True if a record is stored under `shortcode`, regardless of expiration.
        """
        pass

    @abstractmethod
    def insert(self, shortcode: str, target: str, expires_at: datetime, created_at: datetime | None = None, **kwargs) -> ShortURLModel:
        """Insert a new ShortURLModel into the data store.

        The existence check and the write are a single atomic step with
        respect to concurrent inserts of the same shortcode.

        Args:
            shortcode (str):
                Unique key of the new record.
            target (str):
                Destination URL.
            expires_at (datetime):
                Absolute expiration time. Must be later than `created_at`.
            created_at (datetime | None):
                Creation time. Defaults to the DAO clock's current time.

        Returns:
            ShortURLModel: the stored record (hits == 0)

        Raises:
            ShortURLAlreadyExistsError:
                If a record with the same shortcode already exists.
            ValueError:
                If `expires_at` is not later than `created_at`.
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortURLModel | None:
        """Retrieve a ShortURLModel from the data store by its shortcode.

        Returns:
            ShortURLModel | None: The ShortURLModel instance if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def hit(self, shortcode: str, **kwargs) -> int:
        """Atomically increment the hit counter of a stored record.

        Returns:
            int: hit count after the increment

        Raises:
            ShortURLNotFoundError:
                If no ShortURLModel with the given shortcode exists.
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def all(self, **kwargs) -> list[ShortURLModel]:
        """Return a snapshot of every stored record in insertion order.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    def close(self) -> None:
        """Release resources held by the data store. No-op by default."""
        return None

    def __enter__(self) -> 'ShortURLBaseDAO':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
