import uuid
from datetime import date, datetime, time
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from .base import CamelInput, OptionalText, OptionalTime
from .events import EventSummary


class YachtClassCreate(CamelInput):
    name: str = Field(..., min_length=1, max_length=100)
    description: OptionalText = None


class YachtClass(BaseModel):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class RaceCreate(CamelInput):
    yacht_class_id: uuid.UUID
    race_number: Optional[int] = Field(default=None, ge=1)
    race_date: date
    start_time: OptionalTime = None
    wind_direction: OptionalText = Field(default=None, max_length=100)
    wind_speed: Optional[int] = Field(default=None, ge=0)
    notes: OptionalText = None


class RaceResultInput(CamelInput):
    sail_number: str = Field(..., min_length=1, max_length=20)
    yacht_name: OptionalText = Field(default=None, max_length=100)
    helm_name: OptionalText = Field(default=None, max_length=100)
    crew_names: OptionalText = None
    finish_time: OptionalTime = None
    elapsed_time: OptionalText = Field(default=None, max_length=20)
    corrected_time: OptionalText = Field(default=None, max_length=20)
    position: Optional[int] = Field(default=None, ge=0)
    points: Optional[int] = Field(default=None, ge=0)
    disqualified: bool = False
    dns: bool = False
    dnf: bool = False
    retired: bool = False
    notes: OptionalText = None


class RaceResultsSubmission(CamelInput):
    results: List[RaceResultInput]


class RaceResult(BaseModel):
    id: uuid.UUID
    race_id: uuid.UUID
    sail_number: str
    yacht_name: Optional[str] = None
    helm_name: Optional[str] = None
    crew_names: Optional[str] = None
    finish_time: Optional[time] = None
    elapsed_time: Optional[str] = None
    corrected_time: Optional[str] = None
    position: Optional[int] = None
    points: Optional[int] = None
    disqualified: bool
    dns: bool
    dnf: bool
    retired: bool
    notes: Optional[str] = None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


class Race(BaseModel):
    id: uuid.UUID
    event_id: uuid.UUID
    yacht_class_id: uuid.UUID
    race_number: int
    race_date: date
    start_time: Optional[time] = None
    wind_direction: Optional[str] = None
    wind_speed: Optional[int] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    yacht_classes: Optional[YachtClass] = Field(default=None, validation_alias='yacht_class')
    race_results: List[RaceResult] = Field(default_factory=list, validation_alias='results')
    model_config = ConfigDict(from_attributes=True)


class RaceWithEvent(Race):
    events: Optional[EventSummary] = Field(default=None, validation_alias='event')
