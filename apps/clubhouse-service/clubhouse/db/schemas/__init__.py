"""
Domain-split Pydantic schemas.

Forward references between events, races and stories are resolved here once
every module has been imported.
"""

from .base import CamelInput
from .auth import LoginRequest, User, TokenResponse
from .events import EventCreate, EventUpdate, BoatEntryCreate, EventSummary, EventDocument, Event
from .races import (
    YachtClassCreate,
    YachtClass,
    RaceCreate,
    RaceResultInput,
    RaceResultsSubmission,
    RaceResult,
    Race,
    RaceWithEvent,
)
from .stories import StoryCreate, StoryUpdate, Story
from .uploads import UploadedFile

Event.model_rebuild(_types_namespace={"Race": Race, "Story": Story})

__all__ = [
    "CamelInput",
    "LoginRequest",
    "User",
    "TokenResponse",
    "EventCreate",
    "EventUpdate",
    "BoatEntryCreate",
    "EventSummary",
    "EventDocument",
    "Event",
    "YachtClassCreate",
    "YachtClass",
    "RaceCreate",
    "RaceResultInput",
    "RaceResultsSubmission",
    "RaceResult",
    "Race",
    "RaceWithEvent",
    "StoryCreate",
    "StoryUpdate",
    "Story",
    "UploadedFile",
]
