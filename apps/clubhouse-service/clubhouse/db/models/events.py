import uuid
from sqlalchemy import Column, String, Text, Date, Time, DateTime, Integer, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Event(Base):
    __tablename__ = 'events'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    # 'social' | 'regatta' | 'series' | 'racing' | 'training' | 'cruising' | 'committee'
    event_type = Column(String(50), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    start_time = Column(Time, nullable=True)
    location = Column(String(200), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    races = relationship(
        "Race",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="Race.race_date",
    )
    documents = relationship("EventDocument", back_populates="event", cascade="all, delete-orphan")
    stories = relationship("Story", back_populates="event")

    __table_args__ = (
        Index('idx_events_start_date', 'start_date'),
        Index('idx_events_event_type', 'event_type'),
    )


class EventDocument(Base):
    __tablename__ = 'event_documents'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    event_id = Column(UUID(as_uuid=True), ForeignKey('events.id', ondelete='CASCADE'), nullable=False)
    document_name = Column(String(255), nullable=False)
    document_type = Column(String(50), nullable=False, default='general')
    file_url = Column(Text, nullable=False)
    file_size_bytes = Column(Integer, nullable=True)
    mime_type = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    event = relationship("Event", back_populates="documents")

    __table_args__ = (
        Index('idx_event_documents_event_id', 'event_id'),
    )
