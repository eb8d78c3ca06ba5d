# backend/tests/conftest.py
"""
Pytest configuration for the location directory backend.

Sets a throwaway environment BEFORE any app import, then provides:
- an in-memory SQLite session (StaticPool) for repository tests
- a TestClient whose search service reads a per-test in-memory corpus
- a gazetteer-backed geocoder so no test touches the network
"""

import os

# CRITICAL: Set test configuration BEFORE any app imports!
os.environ["CI"] = "true"
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["GEOCODING_PROVIDER"] = "mock"

from typing import Iterator, List, Sequence

from fastapi.testclient import TestClient
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app import models as _models  # noqa: F401
from app.api.dependencies.database import get_db
from app.api.dependencies.services import get_search_service
from app.database import Base
from app.main import fastapi_app as app
from app.services.geocoding.mock_provider import MockGeocodingProvider
from app.services.search.config import SearchConfig
from app.services.search.location_search_service import LocationSearchService
from app.services.search.records import LocationRecord


class ListCorpus:
    """Corpus reading a live list, so tests can seed records after the client exists."""

    def __init__(self, records: List[LocationRecord]) -> None:
        self.records = records

    def fetch_all(self) -> Sequence[LocationRecord]:
        return tuple(self.records)


@pytest.fixture(scope="function")
def db() -> Iterator[Session]:
    """Fresh in-memory database per test."""
    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=test_engine)
    TestSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)
    session = TestSessionLocal()

    yield session

    session.rollback()
    session.close()
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def geocoder() -> MockGeocodingProvider:
    return MockGeocodingProvider()


@pytest.fixture
def search_config() -> SearchConfig:
    return SearchConfig()


@pytest.fixture
def corpus_records() -> List[LocationRecord]:
    """Records served by the client fixture; tests append to this list."""
    return []


@pytest.fixture
def search_service(
    corpus_records: List[LocationRecord],
    geocoder: MockGeocodingProvider,
    search_config: SearchConfig,
) -> LocationSearchService:
    return LocationSearchService(
        corpus=ListCorpus(corpus_records),
        geocoder=geocoder,
        config=search_config,
    )


@pytest.fixture
def client(search_service: LocationSearchService) -> Iterator[TestClient]:
    """Create a test client whose searches run over corpus_records."""
    app.dependency_overrides[get_search_service] = lambda: search_service

    # Don't use context manager - create directly
    test_client = TestClient(app)

    yield test_client

    # Cleanup
    app.dependency_overrides.clear()
    test_client.close()


@pytest.fixture
def db_client(db: Session) -> Iterator[TestClient]:
    """Test client wired to the SQLite test session and the mock geocoder."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    test_client = TestClient(app)

    yield test_client

    app.dependency_overrides.clear()
    test_client.close()
