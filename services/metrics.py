"""
Prometheus metrics for the geolocation service
"""

from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

from models.record import Source

REQUESTS_TOTAL = Counter(
    'ip_geolocation_requests_total',
    'Total number of IP geolocation requests',
    ['country', 'source']
)

REQUEST_DURATION = Histogram(
    'ip_geolocation_request_duration_seconds',
    'Duration of IP geolocation requests',
    ['source']
)

CACHE_HITS = Counter(
    'ip_geolocation_cache_hits_total',
    'Total number of cache hits'
)

CACHE_MISSES = Counter(
    'ip_geolocation_cache_misses_total',
    'Total number of cache misses'
)


def record_resolution(record, source):
    """Count one successful resolution by where it came from"""
    if source is Source.CACHE:
        CACHE_HITS.inc()
    else:
        CACHE_MISSES.inc()
    REQUESTS_TOTAL.labels(country=record.country, source=source.value).inc()


def record_failed_lookup():
    """A miss whose provider call failed still counts as a miss"""
    CACHE_MISSES.inc()


def render_latest():
    """Return (body, content_type) for the /metrics endpoint"""
    return generate_latest(), CONTENT_TYPE_LATEST
