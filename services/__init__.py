"""
Services package
Geolocation providers and cache-aside resolution
"""

from .errors import ValidationError, ProviderError
from .geo import GeoProvider, IPStackProvider, IPApiProvider, build_provider
from .resolver import Resolver, BatchEntry, INVALID_IP, LOOKUP_ERROR

__all__ = [
    'ValidationError',
    'ProviderError',
    'GeoProvider',
    'IPStackProvider',
    'IPApiProvider',
    'build_provider',
    'Resolver',
    'BatchEntry',
    'INVALID_IP',
    'LOOKUP_ERROR'
]
