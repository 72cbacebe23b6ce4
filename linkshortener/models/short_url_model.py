from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ShortURLModel:
    """Represent a registered shortcode -> target URL mapping.

    Instances are snapshots: the registry replaces the stored model when the
    hit counter changes, every other field is fixed at creation.

    Attributes:
        target (str):
            The original long URL that the shortcode redirects to.
        shortcode (str):
            The unique short identifier of the mapping.
        created_at (datetime):
            Moment the mapping was registered (timezone-aware, UTC).
        expires_at (datetime):
            Absolute moment after which the mapping no longer redirects.
        hits (int):
            Number of successful redirects so far.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> now = datetime.now(UTC)
        >>> url = ShortURLModel(
        ...     target="https://example.com/article/123",
        ...     shortcode="abc123",
        ...     created_at=now,
        ...     expires_at=now + timedelta(minutes=30),
        ... )
        >>> url.hits
        0
        >>> url.is_expired(now + timedelta(minutes=31))
        True
    """

    target: str
    shortcode: str
    created_at: datetime
    expires_at: datetime
    hits: int = 0

    def is_expired(self, now: datetime) -> bool:
        """Expiration is strict: a link is still valid at exactly `expires_at`."""
        return now > self.expires_at
