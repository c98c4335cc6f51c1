"""
Shared SQLAlchemy base and helpers.
"""
from sqlalchemy.orm import declarative_base
from datetime import datetime, UTC

# Registers SQLite compilers for PostgreSQL-only column types (JSONB) so the
# declarative metadata can be created on the in-memory test database.
from .. import sqlite_compiler_shims  # noqa: F401


def now_utc():
    """Return an aware UTC datetime for default/updated timestamps."""
    return datetime.now(UTC)


Base = declarative_base()
