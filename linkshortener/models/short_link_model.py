from dataclasses import dataclass
from datetime import datetime


# fmt: off
@dataclass(frozen=True)
class ShortLinkModel:
    shortcode: str          # Registered shortcode (generated or custom alias)
    short_url: str          # Public short URL, <base url>/<shortcode>
    target: str             # Original long URL
    created_at: datetime    # Registration time (UTC)
    expires_at: datetime    # Absolute expiration time (UTC)
# fmt: on
