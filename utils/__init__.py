"""
Utils package
Utility functions and helpers
"""

from .validators import is_valid_ip, normalize_ip
from .helpers import (
    utcnow,
    to_utc_iso,
    parse_utc_iso
)

__all__ = [
    'is_valid_ip',
    'normalize_ip',
    'utcnow',
    'to_utc_iso',
    'parse_utc_iso'
]
