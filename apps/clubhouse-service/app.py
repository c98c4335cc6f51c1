"""
App assembly entry point.

Re-exports the FastAPI `app` from `clubhouse.api.main` so servers can target
``app:app`` from the service directory.
"""

from clubhouse.api.main import app  # noqa: F401
