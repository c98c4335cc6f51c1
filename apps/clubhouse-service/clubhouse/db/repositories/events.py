"""
Event repository functions.

Create/read/update/delete for events and their documents, with relational
includes (races, yacht classes, results, documents, stories) loaded eagerly.
"""
from __future__ import annotations

import uuid
from datetime import date
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, selectinload

from clubhouse.db import models, schemas


def _with_includes(q):
    return q.options(
        selectinload(models.Event.races).selectinload(models.Race.yacht_class),
        selectinload(models.Event.races).selectinload(models.Race.results),
        selectinload(models.Event.documents),
        selectinload(models.Event.stories).selectinload(models.Story.event),
    )


def parse_event_identifier(raw: str) -> Tuple[Optional[uuid.UUID], Optional[date]]:
    """Split ``<uuid>`` or a recurring occurrence id ``<uuid>-YYYY-MM-DD``.

    Returns ``(None, None)`` when the identifier is not understood.
    """
    parts = (raw or "").split("-")
    occurrence = None
    if len(parts) > 5:
        raw = "-".join(parts[:5])
        try:
            occurrence = date.fromisoformat("-".join(parts[5:]))
        except ValueError:
            return None, None
    try:
        return uuid.UUID(raw), occurrence
    except ValueError:
        return None, None


def get_event(db: Session, event_id: uuid.UUID, *, with_includes: bool = False) -> Optional[models.Event]:
    q = db.query(models.Event).filter(models.Event.id == event_id)
    if with_includes:
        q = _with_includes(q)
    return q.first()


def list_events(
    db: Session,
    *,
    event_type: Optional[str] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    skip: int = 0,
    limit: int = 50,
) -> Tuple[List[models.Event], int]:
    """List events newest first with optional type and date-window filters."""
    q = db.query(models.Event)
    if event_type:
        q = q.filter(models.Event.event_type == event_type)
    if start_date:
        q = q.filter(models.Event.start_date >= start_date)
    if end_date:
        q = q.filter(models.Event.end_date <= end_date)
    total = q.count()
    items = _with_includes(q).order_by(models.Event.start_date.desc()).offset(skip).limit(limit).all()
    return items, total


def get_upcoming_events(db: Session, limit: int = 5, *, today: Optional[date] = None) -> List[models.Event]:
    today = today or date.today()
    q = db.query(models.Event).filter(models.Event.start_date >= today)
    return _with_includes(q).order_by(models.Event.start_date.asc()).limit(limit).all()


def get_recent_events(db: Session, limit: int = 5, *, today: Optional[date] = None) -> List[models.Event]:
    today = today or date.today()
    q = db.query(models.Event).filter(models.Event.start_date < today)
    return _with_includes(q).order_by(models.Event.start_date.desc()).limit(limit).all()


def create_event(db: Session, event: schemas.EventCreate) -> models.Event:
    db_event = models.Event(**event.model_dump())
    db.add(db_event)
    db.commit()
    db.refresh(db_event)
    return db_event


def update_event(db: Session, db_event: models.Event, event: schemas.EventUpdate) -> models.Event:
    changes = event.model_dump(exclude_unset=True)
    # Required columns cannot be cleared by an explicit null
    for key in ("title", "event_type", "start_date"):
        if changes.get(key) is None:
            changes.pop(key, None)
    for key, value in changes.items():
        setattr(db_event, key, value)
    db.commit()
    db.refresh(db_event)
    return db_event


def delete_event(db: Session, db_event: models.Event) -> None:
    """Delete an event; races, results and documents go with it, stories are detached."""
    db.delete(db_event)
    db.commit()


def create_event_document(
    db: Session,
    *,
    event_id: uuid.UUID,
    document_name: str,
    document_type: str,
    file_url: str,
    file_size_bytes: int,
    mime_type: str,
) -> models.EventDocument:
    document = models.EventDocument(
        event_id=event_id,
        document_name=document_name,
        document_type=document_type or 'general',
        file_url=file_url,
        file_size_bytes=file_size_bytes,
        mime_type=mime_type,
    )
    db.add(document)
    db.commit()
    db.refresh(document)
    return document
