"""Shared test fixtures

SQLite in-memory for ORM / service tests; the API client gets its own
in-memory DB (StaticPool, shared across TestClient threads), a temporary
evidence directory and a fresh rate limiter.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.dependencies import get_db, get_evidence_store, get_rate_limiter
from app.config import settings
from app.main import app
from app.models.db.base import Base
from app.services.evidence import EvidenceStore
from app.services.rate_limit import RateLimiter


def _sqlite_engine():
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # enforce FK constraints on SQLite
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    return engine


@pytest.fixture(autouse=True)
def _fast_password_hashing(monkeypatch):
    """PBKDF2 at production strength makes the suite crawl"""
    monkeypatch.setattr(settings, "PASSWORD_HASH_ITERATIONS", 1_000)


@pytest.fixture(scope="function")
def db_session() -> Session:
    """SQLite in-memory session (fresh DB per test)"""
    engine = _sqlite_engine()
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture()
def evidence_store(tmp_path) -> EvidenceStore:
    return EvidenceStore(tmp_path / "evidence", max_bytes=1024 * 1024)


@pytest.fixture()
def rate_limiter() -> RateLimiter:
    return RateLimiter()


@pytest.fixture()
def client(evidence_store, rate_limiter):
    """TestClient with DB / storage / limiter overrides"""
    engine = _sqlite_engine()
    SessionTesting = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def _get_test_db():
        db = SessionTesting()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_test_db
    app.dependency_overrides[get_evidence_store] = lambda: evidence_store
    app.dependency_overrides[get_rate_limiter] = lambda: rate_limiter
    yield TestClient(app)
    app.dependency_overrides.clear()
    Base.metadata.drop_all(engine)
    engine.dispose()


def make_property_payload(**overrides) -> dict:
    """Valid camelCase PropertyInput body (all core facilities present)"""
    payload = {
        "municipality": "Barcelona",
        "region": "Barcelonès",
        "propertyType": "flat",
        "useCase": "segunda-ocupacion",
        "usefulArea": 60,
        "ceilingHeight": 2.7,
        "numRooms": 3,
        "intendedOccupancy": 2,
        "numFloors": 1,
        "hasKitchen": True,
        "hasBathroom": True,
        "hasNaturalLight": True,
        "hasVentilation": True,
        "hasHeating": True,
    }
    payload.update(overrides)
    return payload


def register(client: TestClient, email: str = "anna@example.cat", name: str = "Anna") -> dict:
    """Register a user and return {'headers', 'user', 'token'}"""
    resp = client.post(
        "/api/auth/register",
        json={"email": email, "name": name, "password": "contrasenya-segura"},
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()
    return {
        "headers": {"Authorization": f"Bearer {data['accessToken']}"},
        "user": data["user"],
        "token": data["accessToken"],
    }


@pytest.fixture()
def payload():
    """Factory fixture: payload(**overrides) → PropertyInput body"""
    return make_property_payload


@pytest.fixture()
def auth(client):
    """Factory fixture: auth(email, name) → registered user + headers"""
    return lambda email="anna@example.cat", name="Anna": register(client, email, name)
