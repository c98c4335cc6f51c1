import uuid
from datetime import datetime
from typing import Annotated, List, Literal, Optional
from urllib.parse import urlparse
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from .base import CamelInput, OptionalText, blank_to_none
from .events import EventSummary

StoryType = Literal['news', 'racing', 'training', 'social', 'announcement']


def _require_uri(value):
    if value is None:
        return None
    if not urlparse(value).scheme:
        raise ValueError("must be a valid uri")
    return value


ImageUrl = Annotated[Optional[str], BeforeValidator(blank_to_none), AfterValidator(_require_uri)]
OptionalEventId = Annotated[Optional[uuid.UUID], BeforeValidator(blank_to_none)]


class StoryFields(CamelInput):
    excerpt: OptionalText = None
    story_type: Optional[StoryType] = None
    featured_image_url: ImageUrl = None
    gallery_images: Optional[List[str]] = None
    author_name: OptionalText = Field(default=None, max_length=100)
    published: Optional[bool] = None
    tags: Optional[List[str]] = None
    event_id: OptionalEventId = None


class StoryCreate(StoryFields):
    title: str = Field(..., min_length=1, max_length=300)
    content: str = Field(..., min_length=1)


class StoryUpdate(StoryFields):
    title: Optional[str] = Field(default=None, min_length=1, max_length=300)
    content: Optional[str] = Field(default=None, min_length=1)


class Story(BaseModel):
    id: uuid.UUID
    title: str
    slug: str
    excerpt: Optional[str] = None
    content: str
    story_type: str
    featured_image_url: Optional[str] = None
    gallery_images: Optional[List[str]] = None
    author_name: Optional[str] = None
    published: bool
    publish_date: Optional[datetime] = None
    event_id: Optional[uuid.UUID] = None
    tags: List[str] = []
    created_at: datetime
    updated_at: datetime
    events: Optional[EventSummary] = Field(default=None, validation_alias='event')
    model_config = ConfigDict(from_attributes=True)

    @field_validator('tags', mode='before')
    @classmethod
    def _tags_default(cls, value):
        return value or []
