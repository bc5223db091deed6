import pytest

from grc.db import database


_PG_VARS = ("POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_HOST", "POSTGRES_PORT", "POSTGRES_DB")


@pytest.fixture
def no_db_env(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("GRC_TEST_DB", raising=False)
    for name in _PG_VARS:
        monkeypatch.delenv(name, raising=False)


def test_database_url_wins(no_db_env, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/grc")
    assert database._get_database_url() == "postgresql://u:p@db:5432/grc"


def test_database_url_built_from_parts(no_db_env, monkeypatch):
    for name, value in zip(_PG_VARS, ("u", "p", "db", "5432", "grc")):
        monkeypatch.setenv(name, value)
    assert database._get_database_url() == "postgresql://u:p@db:5432/grc"


def test_missing_parts_are_named(no_db_env, monkeypatch):
    monkeypatch.setenv("POSTGRES_USER", "u")
    with pytest.raises(ValueError) as exc:
        database._get_database_url()
    assert "POSTGRES_PASSWORD" in str(exc.value)
    assert "POSTGRES_USER" not in str(exc.value)


def test_pytest_runtime_uses_in_memory_sqlite(no_db_env):
    url, kwargs = database._resolve_engine_args()
    assert url.startswith("sqlite")
    assert ":memory:" in url
    assert "poolclass" in kwargs


def test_explicit_test_db(no_db_env, monkeypatch):
    monkeypatch.setenv("GRC_TEST_DB", "sqlite:///./grc-test.db")
    url, kwargs = database._resolve_engine_args()
    assert url == "sqlite:///./grc-test.db"
    assert kwargs == {"connect_args": {"check_same_thread": False}}
