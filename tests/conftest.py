import pytest
from fastapi.testclient import TestClient

from grc.db import models
from grc.db.database import SessionLocal, engine, init_db
from grc.utils.settings import refresh_settings_cache

_SETTINGS_ENV = (
    "LOG_LEVEL",
    "PAGINATION_ITEMS_PER_PAGE",
    "PAGINATION_MAX_ITEMS_PER_PAGE",
    "CHANGE_LOG_ENABLED",
    "AUDIT_TRAIL_ENABLED",
)


@pytest.fixture(autouse=True)
def _settings_env(monkeypatch):
    """Run every test against default settings."""
    for name in _SETTINGS_ENV:
        monkeypatch.delenv(name, raising=False)
    refresh_settings_cache()
    yield
    refresh_settings_cache()


@pytest.fixture(autouse=True)
def _clean_tables():
    init_db()
    yield
    with engine.begin() as conn:
        for table in reversed(models.Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    from grc.api.main import app

    with TestClient(app) as c:
        yield c
