"""
Tests for the SQLite location cache
"""

from datetime import timedelta

from models.record import CacheRecord


def _record(ip, country, when):
    return CacheRecord(address=ip, country=country, refreshed_at=when)


class TestDatabase:
    """Store operations"""

    def test_get_missing_returns_none(self, db):
        assert db.get_location("8.8.8.8") is None

    def test_upsert_roundtrip_keeps_timezone(self, db, clock):
        record = _record("8.8.8.8", "United States", clock.now)
        db.upsert_location(record)

        stored = db.get_location("8.8.8.8")
        assert stored == record
        assert stored.refreshed_at.utcoffset() == timedelta(0)

    def test_upsert_overwrites_existing_row(self, db, clock):
        db.upsert_location(_record("8.8.8.8", "Old Country", clock.now))
        later = clock.now + timedelta(days=2)
        db.upsert_location(_record("8.8.8.8", "United States", later))

        assert db.count_locations() == 1
        stored = db.get_location("8.8.8.8")
        assert stored.country == "United States"
        assert stored.refreshed_at == later

    def test_delete_location_reports_existence(self, db, clock):
        db.upsert_location(_record("8.8.8.8", "United States", clock.now))

        assert db.delete_location("8.8.8.8") is True
        assert db.delete_location("8.8.8.8") is False
        assert db.get_location("8.8.8.8") is None

    def test_delete_all_returns_row_count(self, db, clock):
        assert db.delete_all_locations() == 0

        for ip in ("8.8.8.8", "1.1.1.1", "9.9.9.9"):
            db.upsert_location(_record(ip, "Somewhere", clock.now))

        assert db.delete_all_locations() == 3
        assert db.count_locations() == 0

    def test_recent_locations_newest_first(self, db, clock):
        db.upsert_location(_record("1.1.1.1", "Australia", clock.now))
        db.upsert_location(_record("8.8.8.8", "United States", clock.now + timedelta(hours=2)))
        db.upsert_location(_record("9.9.9.9", "Switzerland", clock.now + timedelta(hours=1)))

        recent = db.get_recent_locations()
        assert [r.address for r in recent] == ["8.8.8.8", "9.9.9.9", "1.1.1.1"]

    def test_recent_locations_respects_limit(self, db, clock):
        for i in range(5):
            db.upsert_location(_record(f"10.0.0.{i}", "Private", clock.now + timedelta(minutes=i)))

        recent = db.get_recent_locations(limit=2)
        assert [r.address for r in recent] == ["10.0.0.4", "10.0.0.3"]

    def test_stale_rows_are_still_returned(self, db, clock):
        old = clock.now - timedelta(days=30)
        db.upsert_location(_record("8.8.8.8", "United States", old))

        assert db.get_location("8.8.8.8").refreshed_at == old

    def test_recent_locations_zero_limit(self, db, clock):
        db.upsert_location(_record("8.8.8.8", "United States", clock.now))

        assert db.get_recent_locations(limit=0) == []
