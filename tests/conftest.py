import os

# Must be set before stadium_orders is imported: settings are read at import time.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["SEED_ON_STARTUP"] = "0"
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from stadium_orders.core.config import settings
from stadium_orders.db.seed import seed_database
from stadium_orders.db.session import Base, create_db, get_db, instrument_engine
from stadium_orders.main import app


@pytest.fixture()
def engine():
    # one shared in-memory connection so every session sees the same tables
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    instrument_engine(eng)
    create_db(bind=eng)
    yield eng
    Base.metadata.drop_all(bind=eng)
    eng.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    seed_database(session)
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(db, session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def strict_transitions(monkeypatch):
    monkeypatch.setattr(settings, "STRICT_STATUS_TRANSITIONS", True)


@pytest.fixture()
def staff_auth_required(monkeypatch):
    monkeypatch.setattr(settings, "STAFF_AUTH_REQUIRED", True)
