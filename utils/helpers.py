"""
Helper Functions Module
Timestamp helpers shared by the store and the resolver
"""

from datetime import datetime, timezone


def utcnow():
    """
    Get current time as a timezone-aware UTC datetime

    Example:
        >>> utcnow().tzinfo
        datetime.timezone.utc
    """
    return datetime.now(timezone.utc)


def to_utc_iso(value):
    """
    Serialise a datetime as an ISO-8601 UTC string

    Naive datetimes are taken to be UTC already.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec='microseconds')


def parse_utc_iso(iso_string):
    """
    Parse an ISO timestamp into an aware UTC datetime

    Args:
        iso_string: ISO format datetime string, with or without offset or 'Z'

    Returns:
        datetime in UTC

    Raises:
        ValueError: if the string is not a valid ISO timestamp

    Example:
        >>> parse_utc_iso('2025-01-15T10:30:45Z')
        datetime.datetime(2025, 1, 15, 10, 30, 45, tzinfo=datetime.timezone.utc)
    """
    if iso_string.endswith('Z'):
        iso_string = iso_string[:-1] + '+00:00'
    dt = datetime.fromisoformat(iso_string)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
