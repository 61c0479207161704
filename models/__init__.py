"""
Models package
Cache record model and database operations
"""

from .database import Database
from .record import CacheRecord, Source, UNKNOWN_COUNTRY

__all__ = ['Database', 'CacheRecord', 'Source', 'UNKNOWN_COUNTRY']
