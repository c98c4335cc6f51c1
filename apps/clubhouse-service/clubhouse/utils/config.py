"""Runtime configuration read from environment variables.

Values are read on every call so tests can adjust them with monkeypatch.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import List

DEFAULT_JWT_SECRET = "clubhouse-dev-secret-change-me-in-production"
TOKEN_TTL_HOURS = 24

MAX_UPLOAD_BYTES = 10 * 1024 * 1024
MAX_FILES_PER_REQUEST = 5


def _env_str(name: str, default: str) -> str:
    return (os.getenv(name) or "").strip() or default


def _env_int(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def jwt_secret() -> str:
    # Set JWT_SECRET in production; the default only suits local development.
    return _env_str("JWT_SECRET", DEFAULT_JWT_SECRET)


def jwt_algorithm() -> str:
    return _env_str("JWT_ALG", "HS256")


def officer_password(username: str, default: str) -> str:
    """Password for a built-in officer account, e.g. ADMIN_PASSWORD."""
    return _env_str(f"{username.upper()}_PASSWORD", default)


def uploads_dir() -> Path:
    return Path(_env_str("UPLOADS_DIR", "uploads")).resolve()


def cors_origins() -> List[str]:
    raw = _env_str("FRONTEND_URL", "http://localhost:5173")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def log_level_name() -> str:
    return _env_str("LOG_LEVEL", "INFO").upper()


def app_version() -> str:
    return _env_str("APP_VERSION", "1.0.0")


def default_page_size() -> int:
    return _env_int("DEFAULT_PAGE_SIZE", 10)
