import sqlite3
from contextlib import contextmanager

from config import Config
from models.record import CacheRecord
from utils.helpers import to_utc_iso


class Database:
    """Database operations handler for the IP location cache"""

    def __init__(self, db_path=None):
        """
        Initialize database handler

        Args:
            db_path: Path to SQLite database file (optional)
        """
        self.db_path = db_path or Config.DATABASE_PATH

    def get_connection(self):
        """
        Get database connection with row factory

        Returns:
            sqlite3.Connection: Database connection object
        """
        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _cursor(self):
        """Yield a cursor; commit on success, roll back on error, always close"""
        conn = self.get_connection()
        try:
            with conn:
                yield conn.cursor()
        finally:
            conn.close()

    def init_db(self):
        """
        Initialize database tables
        Creates the location cache table if it doesn't exist
        """
        with self._cursor() as cursor:
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS ip_locations (
                    ip TEXT PRIMARY KEY,
                    country TEXT NOT NULL,
                    cached_at TEXT NOT NULL
                )
            """)
            cursor.execute(
                "CREATE INDEX IF NOT EXISTS idx_ip_locations_cached_at ON ip_locations(cached_at)"
            )

    # ========================================================================
    # Location Cache Operations
    # ========================================================================

    def get_location(self, ip):
        """
        Get cached location for IP address

        Freshness is not checked here; stale rows are returned as stored.

        Args:
            ip: IP address (canonical form)

        Returns:
            CacheRecord or None if not cached
        """
        with self._cursor() as cursor:
            cursor.execute(
                "SELECT ip, country, cached_at FROM ip_locations WHERE ip=?",
                (ip,)
            )
            row = cursor.fetchone()
        return CacheRecord.from_row(row) if row else None

    def upsert_location(self, record):
        """
        Insert or overwrite the cached location for record.address

        Args:
            record: CacheRecord to store
        """
        with self._cursor() as cursor:
            cursor.execute("""
                INSERT INTO ip_locations (ip, country, cached_at)
                VALUES (?,?,?)
                ON CONFLICT(ip) DO UPDATE SET
                    country = excluded.country,
                    cached_at = excluded.cached_at
            """, (record.address, record.country, to_utc_iso(record.refreshed_at)))

    def delete_location(self, ip):
        """
        Delete cached location by IP address

        Args:
            ip: IP address to delete

        Returns:
            Boolean: True if deleted, False if not found
        """
        with self._cursor() as cursor:
            cursor.execute("DELETE FROM ip_locations WHERE ip=?", (ip,))
            return cursor.rowcount > 0

    def delete_all_locations(self):
        """
        Delete every cached location

        Returns:
            Number of records deleted
        """
        with self._cursor() as cursor:
            cursor.execute("DELETE FROM ip_locations")
            return cursor.rowcount

    def get_recent_locations(self, limit=None):
        """
        Get cached locations, most recently refreshed first

        Args:
            limit: Maximum number of records (default Config.CACHED_LIST_LIMIT)

        Returns:
            List of CacheRecord
        """
        with self._cursor() as cursor:
            cursor.execute(
                "SELECT ip, country, cached_at FROM ip_locations ORDER BY cached_at DESC LIMIT ?",
                (limit if limit is not None else Config.CACHED_LIST_LIMIT,)
            )
            rows = cursor.fetchall()
        return [CacheRecord.from_row(row) for row in rows]

    def count_locations(self):
        """
        Get total count of cached locations

        Returns:
            Integer: Total number of rows
        """
        with self._cursor() as cursor:
            cursor.execute("SELECT COUNT(*) as total FROM ip_locations")
            return cursor.fetchone()["total"]
