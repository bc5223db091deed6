"""SQLite compilation shims for PostgreSQL-specific SQLAlchemy types.

Installs a compiler for JSONB when the active dialect is SQLite so that the
declarative metadata can be created in test runs that substitute an
in-memory SQLite database. Only storage is preserved; JSONB operators and
indexing are not emulated.

Usage: imported for side-effects by grc.db.models.
"""
from __future__ import annotations

from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.compiler import compiles


@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(element, compiler, **kw):  # pragma: no cover - trivial
    # Stored as TEXT; the JSON bind/result processors still apply.
    return "JSON"
