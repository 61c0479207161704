# tests/conftest.py
from datetime import datetime, timedelta, timezone

import pytest

from app import create_app
from models.database import Database
from services.errors import ProviderError
from services.resolver import Resolver

T0 = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeProvider:
    """In-memory provider that records every lookup"""

    name = "fake"

    def __init__(self, answers=None, failing=()):
        self.answers = dict(answers or {})
        self.failing = set(failing)
        self.calls = []

    def lookup(self, ip):
        self.calls.append(ip)
        if ip in self.failing:
            raise ProviderError(f"provider down for {ip}", address=ip)
        return self.answers.get(ip, "Unknown")


class FrozenClock:
    """Manually advanced clock"""

    def __init__(self, now=T0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def db(tmp_path):
    store = Database(str(tmp_path / "geolocation-test.db"))
    store.init_db()
    return store


@pytest.fixture
def provider():
    return FakeProvider({
        "8.8.8.8": "United States",
        "1.1.1.1": "Australia",
        "2001:4860:4860::8888": "United States",
    })


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def resolver(db, provider, clock):
    return Resolver(db, provider, clock=clock)


@pytest.fixture
def app(db, provider, clock):
    app = create_app(store=db, provider=provider, clock=clock)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
