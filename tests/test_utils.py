"""
Tests for validators and timestamp helpers
"""

from datetime import datetime, timedelta, timezone

import pytest

from utils.helpers import parse_utc_iso, to_utc_iso
from utils.validators import is_valid_ip, normalize_ip


@pytest.mark.parametrize("address,expected", [
    ("8.8.8.8", True),
    ("2001:4860:4860::8888", True),
    ("::ffff:192.0.2.1", True),
    ("256.1.1.1", False),
    ("not-an-ip", False),
    ("", False),
    (" 8.8.8.8", False),
    (None, False),
    (12345, False),
])
def test_is_valid_ip(address, expected):
    assert is_valid_ip(address) is expected


def test_normalize_ip():
    assert normalize_ip("2001:DB8:0:0:0:0:0:1") == "2001:db8::1"
    assert normalize_ip("8.8.8.8") == "8.8.8.8"
    assert normalize_ip("bogus") is None


def test_timestamp_roundtrip():
    when = datetime(2025, 1, 15, 10, 30, 45, tzinfo=timezone.utc)
    assert to_utc_iso(when) == "2025-01-15T10:30:45.000000+00:00"
    assert parse_utc_iso(to_utc_iso(when)) == when


def test_parse_accepts_zulu_and_naive():
    expected = datetime(2025, 1, 15, 10, 30, 45, tzinfo=timezone.utc)
    assert parse_utc_iso("2025-01-15T10:30:45Z") == expected
    assert parse_utc_iso("2025-01-15T10:30:45") == expected


def test_offsets_are_converted_to_utc():
    local = datetime(2025, 1, 15, 12, 30, 45, tzinfo=timezone(timedelta(hours=2)))
    assert to_utc_iso(local) == "2025-01-15T10:30:45.000000+00:00"
