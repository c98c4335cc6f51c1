import uuid
from sqlalchemy import Column, String, Text, Date, Time, DateTime, Integer, Boolean, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class YachtClass(Base):
    __tablename__ = 'yacht_classes'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    races = relationship("Race", back_populates="yacht_class")


class Race(Base):
    __tablename__ = 'races'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    event_id = Column(UUID(as_uuid=True), ForeignKey('events.id', ondelete='CASCADE'), nullable=False)
    yacht_class_id = Column(UUID(as_uuid=True), ForeignKey('yacht_classes.id'), nullable=False)
    race_number = Column(Integer, nullable=False, default=1)
    race_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=True)
    wind_direction = Column(String(100), nullable=True)
    wind_speed = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    event = relationship("Event", back_populates="races")
    yacht_class = relationship("YachtClass", back_populates="races")
    # Display order is by position; storage order is insertion order.
    results = relationship(
        "RaceResult",
        back_populates="race",
        cascade="all, delete-orphan",
        order_by="RaceResult.position",
    )

    __table_args__ = (
        Index('idx_races_event_id', 'event_id'),
    )


class RaceResult(Base):
    __tablename__ = 'race_results'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    race_id = Column(UUID(as_uuid=True), ForeignKey('races.id', ondelete='CASCADE'), nullable=False)
    sail_number = Column(String(20), nullable=False)
    yacht_name = Column(String(100), nullable=True)
    helm_name = Column(String(100), nullable=True)
    crew_names = Column(Text, nullable=True)
    finish_time = Column(Time, nullable=True)
    elapsed_time = Column(String(20), nullable=True)
    corrected_time = Column(String(20), nullable=True)
    position = Column(Integer, nullable=True)
    points = Column(Integer, nullable=True)
    disqualified = Column(Boolean, nullable=False, default=False)
    dns = Column(Boolean, nullable=False, default=False)
    dnf = Column(Boolean, nullable=False, default=False)
    retired = Column(Boolean, nullable=False, default=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)

    race = relationship("Race", back_populates="results")

    __table_args__ = (
        Index('idx_race_results_race_id', 'race_id'),
    )
