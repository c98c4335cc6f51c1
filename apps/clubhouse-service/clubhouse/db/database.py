"""
Database engine and session management.

Builds the SQLAlchemy engine from environment configuration with sensible
test fallbacks (SQLite in-memory) and exposes FastAPI dependencies.
"""
import os
import sys
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

_IN_MEMORY_URL = "sqlite+pysqlite:///:memory:"


# Database connection URL
# Generate dynamically from individual components if DATABASE_URL is not provided
def _get_database_url() -> str:
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")

    db_user = os.getenv("POSTGRES_USER")
    db_password = os.getenv("POSTGRES_PASSWORD")
    db_host = os.getenv("POSTGRES_HOST")
    db_port = os.getenv("POSTGRES_PORT")
    db_name = os.getenv("POSTGRES_DB")

    if not all([db_user, db_password, db_host, db_port, db_name]):
        if _is_pytest_runtime():
            return _IN_MEMORY_URL
        missing = []
        if not db_user: missing.append("POSTGRES_USER")
        if not db_password: missing.append("POSTGRES_PASSWORD")
        if not db_host: missing.append("POSTGRES_HOST")
        if not db_port: missing.append("POSTGRES_PORT")
        if not db_name: missing.append("POSTGRES_DB")
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

    return f"postgresql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"


def _is_pytest_runtime() -> bool:
    """Best-effort detection that we're executing under pytest.

    ``PYTEST_CURRENT_TEST`` is only set while an individual test is running,
    so module import time during collection may not have it yet. The pytest
    package in ``sys.modules`` covers that window.
    """
    if os.getenv("PYTEST_RUNNING") == "1":
        return True
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True
    if "pytest" in sys.modules:
        return True
    return False


# Test override strategy:
# 1. If CLUBHOUSE_TEST_DB is set, use it.
# 2. Else if running under pytest, force in-memory sqlite.
explicit_test_db = os.getenv("CLUBHOUSE_TEST_DB")

if explicit_test_db:
    DATABASE_URL = explicit_test_db
    _sqlite_kwargs = {"connect_args": {"check_same_thread": False}} if DATABASE_URL.startswith("sqlite") else {}
elif _is_pytest_runtime():
    # In-memory SQLite with StaticPool so the schema persists across connections
    DATABASE_URL = _IN_MEMORY_URL
    _sqlite_kwargs = {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }
else:
    DATABASE_URL = _get_database_url()
    _sqlite_kwargs = {}


def _create_engine_with_fallback(url: str, kwargs: dict):
    """Create engine; if creation fails under pytest and no explicit DB is set, fall back to in-memory sqlite."""
    try:
        return create_engine(url, **kwargs)
    except OperationalError:
        if _is_pytest_runtime() and not explicit_test_db:
            return create_engine(
                _IN_MEMORY_URL,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )
        raise


engine = _create_engine_with_fallback(DATABASE_URL, _sqlite_kwargs)

# Every new connection to an in-memory SQLite database must see the tables,
# so create the schema eagerly. Production schemas are managed by Alembic.
if DATABASE_URL.startswith("sqlite") and ":memory:" in DATABASE_URL:
    from clubhouse.db import models  # local import to avoid circular import at module load
    models.Base.metadata.create_all(bind=engine)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency to get a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
