import uuid
from sqlalchemy import Column, String, Text, DateTime, Boolean, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Story(Base):
    __tablename__ = 'stories'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(300), nullable=False)
    # Unique constraint is the backstop for concurrent slug allocation.
    slug = Column(String(350), nullable=False, unique=True)
    excerpt = Column(Text, nullable=True)
    content = Column(Text, nullable=False)
    story_type = Column(String(50), nullable=False, default='news')
    featured_image_url = Column(Text, nullable=True)
    gallery_images = Column(JSONB, nullable=True)
    author_name = Column(String(100), nullable=True)
    published = Column(Boolean, nullable=False, default=False)
    publish_date = Column(DateTime(timezone=True), nullable=True)
    event_id = Column(UUID(as_uuid=True), ForeignKey('events.id', ondelete='SET NULL'), nullable=True)
    tags = Column(JSONB, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    event = relationship("Event", back_populates="stories")

    __table_args__ = (
        Index('idx_stories_published_publish_date', 'published', 'publish_date'),
        Index('idx_stories_story_type', 'story_type'),
    )
