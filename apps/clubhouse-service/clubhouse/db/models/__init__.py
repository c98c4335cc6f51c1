"""
Domain-split SQLAlchemy models.

Exposes `Base`, `now_utc`, and all ORM classes from a single import point.
"""

from .base import Base, now_utc  # re-export

# Domain models
from .events import Event, EventDocument
from .races import YachtClass, Race, RaceResult
from .stories import Story

__all__ = [
    # base
    "Base",
    "now_utc",
    # events
    "Event",
    "EventDocument",
    # racing
    "YachtClass",
    "Race",
    "RaceResult",
    # news
    "Story",
]
