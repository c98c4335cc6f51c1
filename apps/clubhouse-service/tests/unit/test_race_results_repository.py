from datetime import time

import pytest
from sqlalchemy.exc import SQLAlchemyError

from clubhouse.db import models, schemas
from clubhouse.db.repositories import races as race_repo


def _result(**kwargs):
    return schemas.RaceResultInput(**kwargs)


@pytest.fixture
def race(event_factory, yacht_class_factory, race_factory):
    return race_factory(event_factory(), yacht_class_factory())


def _stored(db_session, race):
    db_session.expire_all()
    return race_repo.get_results_for_race(db_session, race.id)


def test_replace_inserts_rows_in_input_order(db_session, race):
    rows = race_repo.replace_race_results(
        db_session,
        race.id,
        [_result(sail_number="GBR 1"), _result(sail_number="GBR 2"), _result(sail_number="GBR 3")],
    )
    assert [r.sail_number for r in rows] == ["GBR 1", "GBR 2", "GBR 3"]
    assert [r.position for r in rows] == [1, 2, 3]


def test_replace_discards_previous_result_set(db_session, race, result_factory):
    result_factory(race, "OLD 1", position=1)
    result_factory(race, "OLD 2", position=2)

    race_repo.replace_race_results(db_session, race.id, [_result(sail_number="NEW 1")])

    stored = _stored(db_session, race)
    assert [r.sail_number for r in stored] == ["NEW 1"]


def test_replace_with_empty_list_clears_results(db_session, race, result_factory):
    result_factory(race, "OLD 1", position=1)
    assert race_repo.replace_race_results(db_session, race.id, []) == []
    assert _stored(db_session, race) == []


def test_explicit_position_is_kept_and_missing_position_uses_index(db_session, race):
    rows = race_repo.replace_race_results(
        db_session,
        race.id,
        [
            _result(sail_number="A", position=5),
            _result(sail_number="B"),
            _result(sail_number="C", position=0),
        ],
    )
    assert [(r.sail_number, r.position) for r in rows] == [("A", 5), ("B", 2), ("C", 0)]


def test_duplicate_positions_are_allowed(db_session, race):
    rows = race_repo.replace_race_results(
        db_session, race.id, [_result(sail_number="A", position=1), _result(sail_number="B", position=1)]
    )
    assert [r.position for r in rows] == [1, 1]


def test_flags_and_times_are_stored(db_session, race):
    race_repo.replace_race_results(
        db_session,
        race.id,
        [_result(sail_number="A", finish_time="14:05:30", dnf=True, elapsed_time="01:05:30", points=3)],
    )
    (row,) = _stored(db_session, race)
    assert row.finish_time == time(14, 5, 30)
    assert row.dnf is True and row.dns is False and row.disqualified is False and row.retired is False
    assert row.elapsed_time == "01:05:30"
    assert row.points == 3


def test_failed_insert_rolls_back_deletes(db_session, race, result_factory):
    result_factory(race, "OLD 1", position=1)
    result_factory(race, "OLD 2", position=2)

    # sail_number is NOT NULL; bypass validation to make the insert fail mid-transaction
    broken = schemas.RaceResultInput.model_construct(sail_number=None)
    with pytest.raises(SQLAlchemyError):
        race_repo.replace_race_results(db_session, race.id, [_result(sail_number="NEW 1"), broken])

    stored = _stored(db_session, race)
    assert sorted(r.sail_number for r in stored) == ["OLD 1", "OLD 2"]


def test_results_of_other_races_are_untouched(db_session, event_factory, yacht_class_factory, race_factory, result_factory):
    event = event_factory()
    laser = yacht_class_factory("Laser")
    race_one = race_factory(event, laser, race_number=1)
    race_two = race_factory(event, laser, race_number=2)
    result_factory(race_two, "KEEP", position=1)

    race_repo.replace_race_results(db_session, race_one.id, [_result(sail_number="NEW")])

    assert [r.sail_number for r in _stored(db_session, race_two)] == ["KEEP"]
    assert db_session.query(models.RaceResult).count() == 2
