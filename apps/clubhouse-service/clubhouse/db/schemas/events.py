import uuid
from datetime import date, datetime, time
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

from .base import CamelInput, OptionalDate, OptionalText, OptionalTime

EventType = Literal['social', 'regatta', 'series', 'racing', 'training', 'cruising', 'committee']


class EventCreate(CamelInput):
    title: str = Field(..., min_length=1, max_length=200)
    description: OptionalText = None
    event_type: EventType
    start_date: date
    end_date: OptionalDate = None
    start_time: OptionalTime = None
    location: OptionalText = Field(default=None, max_length=200)


class EventUpdate(CamelInput):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: OptionalText = None
    event_type: Optional[EventType] = None
    start_date: Optional[date] = None
    end_date: OptionalDate = None
    start_time: OptionalTime = None
    location: OptionalText = Field(default=None, max_length=200)


class BoatEntryCreate(CamelInput):
    boat_name: str = Field(..., min_length=1, max_length=100)
    skipper: str = Field(..., min_length=1, max_length=100)
    sail_number: str = Field(..., min_length=1, max_length=20)
    boat_class: str = Field(..., min_length=1, max_length=100, alias='class')


class EventSummary(BaseModel):
    id: uuid.UUID
    title: str
    start_date: date
    event_type: str
    model_config = ConfigDict(from_attributes=True)


class EventDocument(BaseModel):
    id: uuid.UUID
    event_id: uuid.UUID
    document_name: str
    document_type: str
    file_url: str
    file_size_bytes: Optional[int] = None
    mime_type: Optional[str] = None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class Event(BaseModel):
    id: uuid.UUID | str
    title: str
    description: Optional[str] = None
    event_type: str
    start_date: date
    end_date: Optional[date] = None
    start_time: Optional[time] = None
    location: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    races: List['Race'] = []
    event_documents: List[EventDocument] = Field(default_factory=list, validation_alias='documents')
    stories: List['Story'] = []
    model_config = ConfigDict(from_attributes=True)
