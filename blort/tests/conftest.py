import os
from datetime import datetime, timedelta

import pytest

# Test environment, set before the application modules read it
os.environ["TESTING"] = "True"
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from blort.database.config import get_settings
from blort.database.database import build_engine, get_engine, get_registry, init_db
from blort.services.crud.visit import VisitRegistry


class FakeClock:
    """Deterministic clock: every call is one second after the previous one"""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 12, 0, 0)):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(seconds=1)
        return value


@pytest.fixture(autouse=True)
def reset_cached_settings():
    """Settings and the engine are cached per process; start each test clean"""
    get_settings.cache_clear()
    get_engine.cache_clear()
    yield
    get_settings.cache_clear()
    get_engine.cache_clear()


@pytest.fixture
def engine():
    """In-memory database, one shared connection"""
    engine = build_engine("sqlite:///:memory:", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def file_engine(tmp_path):
    """File-backed database for tests that use several connections at once"""
    engine = build_engine(f"sqlite:///{tmp_path / 'blort.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def registry(engine, clock):
    return VisitRegistry(engine, clock=clock)


@pytest.fixture
def app(registry):
    """Application wired to the test registry"""
    from blort.api import create_application

    app = create_application()
    app.dependency_overrides[get_registry] = lambda: registry
    return app


@pytest.fixture
def client(app):
    return TestClient(app)
