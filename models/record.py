"""
Cache record model
One cached geolocation answer per IP address
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from utils.helpers import to_utc_iso, parse_utc_iso

UNKNOWN_COUNTRY = "Unknown"


class Source(Enum):
    """Where a resolved record came from"""

    CACHE = "cache"
    EXTERNAL = "external_api"


@dataclass(frozen=True)
class CacheRecord:
    """Cached country for an IP address"""

    address: str
    country: str
    refreshed_at: datetime

    def is_fresh(self, now, ttl):
        """True while the record is younger than ``ttl`` at ``now``"""
        return now - self.refreshed_at < ttl

    def to_dict(self):
        """Wire representation used by the HTTP API"""
        return {
            "ip": self.address,
            "country": self.country,
            "cached_at": to_utc_iso(self.refreshed_at),
        }

    @classmethod
    def from_row(cls, row):
        """Build a record from an ``ip_locations`` row"""
        return cls(
            address=row["ip"],
            country=row["country"],
            refreshed_at=parse_utc_iso(row["cached_at"]),
        )
