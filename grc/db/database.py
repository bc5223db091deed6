"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration with a test
fallback (SQLite in-memory) and exposes the FastAPI session dependency.
"""
import logging
import os
import sys
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)

_SQLITE_MEMORY_URL = "sqlite+pysqlite:///:memory:"


def _get_database_url() -> str:
    # If DATABASE_URL is explicitly set, use it
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    # Otherwise, generate from individual components (all must be set)
    parts = {
        "POSTGRES_USER": os.getenv("POSTGRES_USER"),
        "POSTGRES_PASSWORD": os.getenv("POSTGRES_PASSWORD"),
        "POSTGRES_HOST": os.getenv("POSTGRES_HOST"),
        "POSTGRES_PORT": os.getenv("POSTGRES_PORT"),
        "POSTGRES_DB": os.getenv("POSTGRES_DB"),
    }
    missing = [name for name, value in parts.items() if not value]
    if missing:
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

    return (
        f"postgresql://{parts['POSTGRES_USER']}:{parts['POSTGRES_PASSWORD']}"
        f"@{parts['POSTGRES_HOST']}:{parts['POSTGRES_PORT']}/{parts['POSTGRES_DB']}"
    )


def _is_pytest_runtime() -> bool:
    """Best-effort detection that we're executing under pytest.

    ``PYTEST_CURRENT_TEST`` is only set while a test runs, so module import
    during collection is detected through ``sys.modules`` instead.
    ``PYTEST_RUNNING=1`` forces the test behaviour.
    """
    if os.getenv("PYTEST_RUNNING") == "1":
        return True
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    return "pytest" in sys.modules


def _resolve_engine_args():
    """Return ``(url, kwargs)`` for ``create_engine``.

    Precedence: GRC_TEST_DB, then in-memory SQLite under pytest, then the
    regular DATABASE_URL / POSTGRES_* configuration.
    """
    explicit_test_db = os.getenv("GRC_TEST_DB")
    if explicit_test_db:
        kwargs = {"connect_args": {"check_same_thread": False}} if explicit_test_db.startswith("sqlite") else {}
        return explicit_test_db, kwargs
    if _is_pytest_runtime():
        # StaticPool so the schema persists across connections
        return _SQLITE_MEMORY_URL, {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return _get_database_url(), {}


DATABASE_URL, _engine_kwargs = _resolve_engine_args()

engine = create_engine(DATABASE_URL, **_engine_kwargs)
logger.debug("database_engine: dialect=%s", engine.dialect.name)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """Create all tables known to the models package."""
    from grc.db import models  # local import to avoid circular import at module load
    models.Base.metadata.create_all(bind=engine)


# An in-memory SQLite database only lives as long as the engine, so the
# schema is created eagerly.
if DATABASE_URL.startswith("sqlite") and ":memory:" in DATABASE_URL:
    init_db()


def get_db():
    """Dependency to get a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
