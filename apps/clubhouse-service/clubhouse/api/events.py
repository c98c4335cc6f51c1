"""
Events API endpoints.

Public listing and detail (including recurring occurrence ids of the form
``<uuid>-YYYY-MM-DD``), officer-only create/update/delete, and the boat
entry endpoints, which are acknowledged but not stored.
"""
import logging
import uuid
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from clubhouse.api import envelope
from clubhouse.api.deps import require_content_manager
from clubhouse.db import models, schemas
from clubhouse.db.database import get_db
from clubhouse.db.repositories import events as event_repo
from clubhouse.db.schemas.events import EventType
from clubhouse.utils.token_crypto import TokenUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/events", tags=["events"])

RECENT_RESULTS_PER_RACE = 3


def _serialize(event: models.Event, *, published_stories_only: bool = True) -> schemas.Event:
    item = schemas.Event.model_validate(event)
    if published_stories_only:
        item.stories = [story for story in item.stories if story.published]
    return item


def _get_event_or_404(db: Session, event_id: uuid.UUID) -> models.Event:
    event = event_repo.get_event(db, event_id)
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return event


@router.get("")
def list_events(
    event_type: Optional[EventType] = Query(default=None, alias="eventType"),
    type_: Optional[EventType] = Query(default=None, alias="type"),
    start_date: Optional[date] = Query(default=None, alias="startDate"),
    end_date: Optional[date] = Query(default=None, alias="endDate"),
    published: bool = Query(default=True),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=50, ge=1, le=100),
    db: Session = Depends(get_db),
):
    """``published=false`` includes unpublished stories in each event's ``stories``."""
    items, total = event_repo.list_events(
        db,
        event_type=event_type or type_,
        start_date=start_date,
        end_date=end_date,
        skip=(page - 1) * limit,
        limit=limit,
    )
    data = [_serialize(e, published_stories_only=published) for e in items]
    return envelope.paginated(data, page=page, limit=limit, total=total)


@router.get("/upcoming")
def upcoming_events(limit: int = Query(default=5, ge=1, le=50), db: Session = Depends(get_db)):
    return envelope.ok([_serialize(e) for e in event_repo.get_upcoming_events(db, limit)])


@router.get("/recent")
def recent_events(limit: int = Query(default=5, ge=1, le=50), db: Session = Depends(get_db)):
    data: List[schemas.Event] = []
    for event in event_repo.get_recent_events(db, limit):
        item = _serialize(event)
        for race in item.races:
            race.race_results = race.race_results[:RECENT_RESULTS_PER_RACE]
        data.append(item)
    return envelope.ok(data)


@router.get("/{event_id}")
def get_event(event_id: str, db: Session = Depends(get_db)):
    base_id, occurrence = event_repo.parse_event_identifier(event_id)
    event = event_repo.get_event(db, base_id, with_includes=True) if base_id else None
    if event is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    item = _serialize(event)
    if occurrence is not None:
        logger.info("recurring_event_requested: event_id=%s date=%s", base_id, occurrence)
        item = item.model_copy(update={"id": event_id, "start_date": occurrence, "end_date": occurrence})
    return envelope.ok(item)


@router.post("", status_code=status.HTTP_201_CREATED)
def create_event(
    payload: schemas.EventCreate,
    db: Session = Depends(get_db),
    user: TokenUser = Depends(require_content_manager),
):
    event = event_repo.create_event(db, payload)
    logger.info("event_created: id=%s title=%r by=%s", event.id, event.title, user.username)
    return envelope.ok(_serialize(event), "Event created successfully", status.HTTP_201_CREATED)


@router.put("/{event_id}")
def update_event(
    event_id: uuid.UUID,
    payload: schemas.EventUpdate,
    db: Session = Depends(get_db),
    user: TokenUser = Depends(require_content_manager),
):
    event = event_repo.update_event(db, _get_event_or_404(db, event_id), payload)
    logger.info("event_updated: id=%s by=%s", event.id, user.username)
    return envelope.ok(_serialize(event), "Event updated successfully")


@router.delete("/{event_id}")
def delete_event(
    event_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: TokenUser = Depends(require_content_manager),
):
    event = _get_event_or_404(db, event_id)
    title = event.title
    event_repo.delete_event(db, event)
    logger.info("event_deleted: id=%s title=%r by=%s", event_id, title, user.username)
    return envelope.ok(message="Event deleted successfully")


@router.post("/{event_id}/entries", status_code=status.HTTP_201_CREATED)
def add_boat_entry(
    event_id: uuid.UUID,
    payload: schemas.BoatEntryCreate,
    db: Session = Depends(get_db),
):
    # Entries are not stored yet; the request is validated and acknowledged.
    _get_event_or_404(db, event_id)
    logger.info("boat_entry_received: event_id=%s sail_number=%s", event_id, payload.sail_number)
    data = {"eventId": str(event_id), **payload.model_dump(by_alias=True)}
    return envelope.ok(data, "Boat entry added successfully", status.HTTP_201_CREATED)


@router.delete("/{event_id}/entries/{entry_id}")
def remove_boat_entry(event_id: uuid.UUID, entry_id: str, db: Session = Depends(get_db)):
    _get_event_or_404(db, event_id)
    logger.info("boat_entry_removal_received: event_id=%s entry_id=%s", event_id, entry_id)
    return envelope.ok(message="Boat entry removed successfully")
