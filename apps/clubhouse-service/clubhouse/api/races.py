"""
Races API endpoints.

Race creation under an event and the results submission, which replaces the
complete result set of a race in one transaction.
"""
import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from clubhouse.api import envelope
from clubhouse.api.deps import require_content_manager
from clubhouse.db import schemas
from clubhouse.db.database import get_db
from clubhouse.db.repositories import events as event_repo
from clubhouse.db.repositories import races as race_repo
from clubhouse.utils.token_crypto import TokenUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/races", tags=["races"])


def _race_not_found():
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Race not found")


@router.get("/events/{event_id}")
def list_event_races(event_id: uuid.UUID, db: Session = Depends(get_db)):
    if event_repo.get_event(db, event_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    races = race_repo.list_races_for_event(db, event_id)
    return envelope.ok([schemas.Race.model_validate(r) for r in races])


@router.post("/events/{event_id}", status_code=status.HTTP_201_CREATED)
def create_race(
    event_id: uuid.UUID,
    payload: schemas.RaceCreate,
    db: Session = Depends(get_db),
    user: TokenUser = Depends(require_content_manager),
):
    if event_repo.get_event(db, event_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    if race_repo.get_yacht_class(db, payload.yacht_class_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Yacht class not found")
    race = race_repo.create_race(db, event_id, payload)
    logger.info("race_created: id=%s event_id=%s by=%s", race.id, event_id, user.username)
    return envelope.ok(schemas.RaceWithEvent.model_validate(race), "Race created successfully", status.HTTP_201_CREATED)


@router.get("/{race_id}/results")
def get_race_results(race_id: uuid.UUID, db: Session = Depends(get_db)):
    race = race_repo.get_race(db, race_id, with_includes=True)
    if race is None:
        raise _race_not_found()
    return envelope.ok(schemas.RaceWithEvent.model_validate(race))


@router.post("/{race_id}/results", status_code=status.HTTP_201_CREATED)
def submit_race_results(
    race_id: uuid.UUID,
    payload: schemas.RaceResultsSubmission,
    db: Session = Depends(get_db),
    user: TokenUser = Depends(require_content_manager),
):
    if race_repo.get_race(db, race_id) is None:
        raise _race_not_found()
    rows = race_repo.replace_race_results(db, race_id, payload.results)
    logger.info("race_results_submitted: race_id=%s count=%d by=%s", race_id, len(rows), user.username)
    data = [schemas.RaceResult.model_validate(r) for r in rows]
    return envelope.ok(data, "Race results submitted successfully", status.HTTP_201_CREATED)
