import os
import tempfile
from datetime import date, datetime, timedelta, timezone

# Must be set before clubhouse.db.database is imported so the engine is
# bound to in-memory SQLite and uploads never land in the working tree.
os.environ.setdefault("PYTEST_RUNNING", "1")
os.environ.setdefault("UPLOADS_DIR", tempfile.mkdtemp(prefix="clubhouse-uploads-"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from clubhouse.db import models
from clubhouse.db.database import SessionLocal, engine
from clubhouse.utils import slugs
from clubhouse.utils.token_crypto import TokenUser, issue_token

ADMIN = TokenUser(id="1", username="admin", name="Club Administrator", role="admin")
COMMODORE = TokenUser(id="2", username="commodore", name="Commodore", role="commodore")


@pytest.fixture(scope="session", autouse=True)
def create_schema_once():
    """Create all tables once per test session."""
    models.Base.metadata.create_all(bind=engine)
    yield
    models.Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_data():
    """Delete all rows between tests without dropping metadata (faster)."""
    connection = engine.connect()
    trans = connection.begin()
    for table in reversed(models.Base.metadata.sorted_tables):
        connection.execute(table.delete())
    trans.commit()
    connection.close()
    yield


@pytest.fixture
def db_session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def app():
    from clubhouse.api.main import app as fastapi_app
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


def _bearer(user: TokenUser) -> dict:
    return {"Authorization": f"Bearer {issue_token(user)}"}


@pytest.fixture
def admin_headers():
    return _bearer(ADMIN)


@pytest.fixture
def commodore_headers():
    return _bearer(COMMODORE)


@pytest.fixture
def event_factory(db_session: Session):
    def _create(title: str = "Summer Regatta", event_type: str = "regatta", start_date: date = None, **kwargs):
        event = models.Event(
            title=title,
            event_type=event_type,
            start_date=start_date or date.today() + timedelta(days=7),
            **kwargs,
        )
        db_session.add(event)
        db_session.commit()
        db_session.refresh(event)
        return event
    return _create


@pytest.fixture
def yacht_class_factory(db_session: Session):
    def _create(name: str = "Laser", description: str = None):
        yacht_class = models.YachtClass(name=name, description=description)
        db_session.add(yacht_class)
        db_session.commit()
        db_session.refresh(yacht_class)
        return yacht_class
    return _create


@pytest.fixture
def race_factory(db_session: Session):
    def _create(event, yacht_class, race_number: int = 1, race_date: date = None, **kwargs):
        race = models.Race(
            event_id=event.id,
            yacht_class_id=yacht_class.id,
            race_number=race_number,
            race_date=race_date or event.start_date,
            **kwargs,
        )
        db_session.add(race)
        db_session.commit()
        db_session.refresh(race)
        return race
    return _create


@pytest.fixture
def result_factory(db_session: Session):
    def _create(race, sail_number: str, position: int = None, **kwargs):
        result = models.RaceResult(race_id=race.id, sail_number=sail_number, position=position, **kwargs)
        db_session.add(result)
        db_session.commit()
        db_session.refresh(result)
        return result
    return _create


@pytest.fixture
def story_factory(db_session: Session):
    def _create(title: str = "Club News", content: str = "Story body", published: bool = True, slug: str = None, **kwargs):
        kwargs.setdefault("publish_date", datetime.now(timezone.utc) if published else None)
        story = models.Story(
            title=title,
            slug=slug or slugs.allocate_slug(db_session, title),
            content=content,
            published=published,
            **kwargs,
        )
        db_session.add(story)
        db_session.commit()
        db_session.refresh(story)
        return story
    return _create
