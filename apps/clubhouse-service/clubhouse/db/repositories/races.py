"""
Race, yacht class and race result repository functions.

`replace_race_results` is the results-replacement transaction: the stored
result set for a race is swapped for a new one as a single unit.
"""
from __future__ import annotations

import uuid
from typing import List, Optional, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from clubhouse.db import models, schemas


def list_yacht_classes(db: Session) -> List[models.YachtClass]:
    return db.query(models.YachtClass).order_by(models.YachtClass.name.asc()).all()


def get_yacht_class(db: Session, yacht_class_id: uuid.UUID) -> Optional[models.YachtClass]:
    return db.query(models.YachtClass).filter(models.YachtClass.id == yacht_class_id).first()


def get_yacht_class_by_name(db: Session, name: str) -> Optional[models.YachtClass]:
    return db.query(models.YachtClass).filter(models.YachtClass.name == name).first()


def create_yacht_class(db: Session, yacht_class: schemas.YachtClassCreate) -> models.YachtClass:
    db_class = models.YachtClass(name=yacht_class.name, description=yacht_class.description)
    db.add(db_class)
    db.commit()
    db.refresh(db_class)
    return db_class


def _with_includes(q):
    return q.options(
        selectinload(models.Race.yacht_class),
        selectinload(models.Race.results),
        selectinload(models.Race.event),
    )


def get_race(db: Session, race_id: uuid.UUID, *, with_includes: bool = False) -> Optional[models.Race]:
    q = db.query(models.Race).filter(models.Race.id == race_id)
    if with_includes:
        q = _with_includes(q)
    return q.first()


def list_races_for_event(db: Session, event_id: uuid.UUID) -> List[models.Race]:
    q = db.query(models.Race).filter(models.Race.event_id == event_id)
    return _with_includes(q).order_by(models.Race.race_date.asc(), models.Race.race_number.asc()).all()


def create_race(db: Session, event_id: uuid.UUID, race: schemas.RaceCreate) -> models.Race:
    data = race.model_dump()
    data["race_number"] = data.get("race_number") or 1
    db_race = models.Race(event_id=event_id, **data)
    db.add(db_race)
    db.commit()
    db.refresh(db_race)
    return db_race


def replace_race_results(
    db: Session,
    race_id: uuid.UUID,
    results: Sequence[schemas.RaceResultInput],
) -> List[models.RaceResult]:
    """Atomically replace every stored result for ``race_id``.

    Deletes the existing rows and inserts one row per input, in input order,
    within one transaction. A database error rolls back the deletes too, so the
    previous result set survives unchanged. Inputs without a position get
    ``index + 1``.
    """
    rows: List[models.RaceResult] = []
    try:
        (
            db.query(models.RaceResult)
            .filter(models.RaceResult.race_id == race_id)
            .delete(synchronize_session=False)
        )
        for index, result in enumerate(results):
            values = result.model_dump(exclude={"position"})
            position = result.position if result.position is not None else index + 1
            row = models.RaceResult(race_id=race_id, position=position, **values)
            db.add(row)
            rows.append(row)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    for row in rows:
        db.refresh(row)
    return rows


def get_results_for_race(db: Session, race_id: uuid.UUID) -> List[models.RaceResult]:
    return (
        db.query(models.RaceResult)
        .filter(models.RaceResult.race_id == race_id)
        .order_by(models.RaceResult.position.asc())
        .all()
    )
