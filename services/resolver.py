"""
Resolver Module
Cache-aside country resolution: store first, provider on miss
"""

import logging
import sqlite3
from dataclasses import dataclass
from typing import Optional

from config import Config
from models.record import CacheRecord, Source
from services.errors import ProviderError, ValidationError
from utils.helpers import utcnow
from utils.validators import normalize_ip

logger = logging.getLogger(__name__)

INVALID_IP = "Invalid IP"
LOOKUP_ERROR = "Error"


@dataclass(frozen=True)
class BatchEntry:
    """One result of a batch resolution, either a record or an error tag"""

    address: str
    record: Optional[CacheRecord] = None
    source: Optional[Source] = None
    error: Optional[str] = None

    @property
    def ok(self):
        return self.record is not None

    def to_dict(self):
        if self.record is not None:
            return self.record.to_dict()
        return {"ip": self.address, "country": self.error, "cached_at": None}


class Resolver:
    """
    Resolve IP addresses to countries through the location cache

    Args:
        store: Database-like object with get_location / upsert_location
        provider: GeoProvider used on cache misses
        clock: Callable returning the current aware UTC datetime (optional)
        ttl: Freshness window (default Config.CACHE_TTL)
        max_batch: Largest accepted batch (default Config.MAX_BULK_IPS)
    """

    def __init__(self, store, provider, clock=None, ttl=None, max_batch=None):
        self.store = store
        self.provider = provider
        self.clock = clock or utcnow
        self.ttl = ttl if ttl is not None else Config.CACHE_TTL
        self.max_batch = max_batch if max_batch is not None else Config.MAX_BULK_IPS

    def resolve(self, address):
        """
        Resolve one address

        Returns:
            Tuple of (CacheRecord, Source)

        Raises:
            ValidationError: address is not an IP literal
            ProviderError: cache miss and the provider failed
        """
        ip = normalize_ip(address)
        if ip is None:
            raise ValidationError(f"Invalid IP address: {address!r}")

        cached = self._read(ip)
        if cached is not None and cached.is_fresh(self.clock(), self.ttl):
            return cached, Source.CACHE

        # Stale rows are left in place until the provider answers.
        country = self.provider.lookup(ip)
        record = CacheRecord(address=ip, country=country, refreshed_at=self.clock())
        self._write(record)
        return record, Source.EXTERNAL

    def resolve_all(self, addresses):
        """
        Resolve a batch of addresses in input order

        Per-item failures become placeholder entries tagged "Invalid IP"
        or "Error"; only an oversized batch fails the whole call.

        Raises:
            ValidationError: more than max_batch addresses
        """
        addresses = list(addresses)
        if len(addresses) > self.max_batch:
            raise ValidationError(
                f"Maximum {self.max_batch} IPs allowed per request, got {len(addresses)}"
            )

        results = []
        for address in addresses:
            try:
                record, source = self.resolve(address)
            except ValidationError:
                results.append(BatchEntry(address=address, error=INVALID_IP))
            except ProviderError as e:
                logger.warning("Lookup failed for %s: %s", address, e)
                results.append(BatchEntry(address=address, error=LOOKUP_ERROR))
            else:
                results.append(BatchEntry(address=address, record=record, source=source))
        return results

    def _read(self, ip):
        try:
            return self.store.get_location(ip)
        except sqlite3.Error as e:
            logger.warning("Cache read failed for %s, treating as miss: %s", ip, e)
            return None

    def _write(self, record):
        try:
            self.store.upsert_location(record)
        except sqlite3.Error as e:
            logger.warning("Failed to save %s to cache: %s", record.address, e)
