import os

# Point settings at throwaway backends before the app is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("STORAGE_BACKEND", "memory")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from perfboard.main import app
from perfboard.core.events import ChangeFeed
from perfboard.db.base import Base
from perfboard.db.session import build_engine
from perfboard.storage import MemoryStore, SqlStore, get_store


@pytest.fixture()
def feed():
    return ChangeFeed()


@pytest.fixture()
def store(feed):
    """Fresh in-memory store per test; the API is wired to it by default."""
    return MemoryStore(feed=feed)


@pytest.fixture()
def sql_engine():
    # one shared connection so every session sees the same in-memory database
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session(sql_engine):
    TestingSessionLocal = sessionmaker(
        bind=sql_engine, autocommit=False, autoflush=False, expire_on_commit=False
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def sql_store(db_session, feed):
    return SqlStore(db_session, feed=feed)


@pytest.fixture(autouse=True)
def override_get_store(store):
    app.dependency_overrides[get_store] = lambda: store
    yield
    app.dependency_overrides.clear()


@pytest.fixture()
def client():
    return TestClient(app)
