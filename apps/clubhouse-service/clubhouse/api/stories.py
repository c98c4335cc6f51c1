"""
Stories API endpoints.

Stories are addressed by id or slug. Unpublished stories are only visible to
officers who manage content; everyone else gets the same 404 as for a story
that does not exist.
"""
import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from clubhouse.api import envelope
from clubhouse.api.deps import get_optional_user, require_content_manager
from clubhouse.db import models, schemas
from clubhouse.db.database import get_db
from clubhouse.db.repositories import events as event_repo
from clubhouse.db.repositories import stories as story_repo
from clubhouse.db.schemas.stories import StoryType
from clubhouse.utils import config
from clubhouse.utils.role_permissions import can_view_unpublished
from clubhouse.utils.token_crypto import TokenUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/stories", tags=["stories"])


def _story_not_found():
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Story not found")


def _get_story_or_404(db: Session, story_id: uuid.UUID) -> models.Story:
    story = story_repo.get_story(db, story_id)
    if story is None:
        raise _story_not_found()
    return story


def _ensure_event_exists(db: Session, event_id: Optional[uuid.UUID]) -> None:
    if event_id is not None and event_repo.get_event(db, event_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")


@router.get("")
def list_stories(
    story_type: Optional[StoryType] = Query(default=None, alias="type"),
    search: Optional[str] = Query(default=None, max_length=200),
    published: bool = Query(default=True),
    page: int = Query(default=1, ge=1),
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    db: Session = Depends(get_db),
    user: Optional[TokenUser] = Depends(get_optional_user),
):
    """List stories, newest first.

    ``published=false`` also lists drafts, but only for content managers.
    """
    limit = limit or config.default_page_size()
    published_only = published or not can_view_unpublished(user.role if user else None)
    items, total = story_repo.list_stories(
        db,
        published_only=published_only,
        story_type=story_type,
        search=(search or "").strip() or None,
        skip=(page - 1) * limit,
        limit=limit,
    )
    data = [schemas.Story.model_validate(s) for s in items]
    return envelope.paginated(data, page=page, limit=limit, total=total)


@router.get("/featured")
def featured_stories(limit: int = Query(default=3, ge=1, le=20), db: Session = Depends(get_db)):
    return envelope.ok([schemas.Story.model_validate(s) for s in story_repo.get_featured_stories(db, limit)])


@router.get("/recent")
def recent_stories(limit: int = Query(default=5, ge=1, le=20), db: Session = Depends(get_db)):
    return envelope.ok([schemas.Story.model_validate(s) for s in story_repo.get_recent_stories(db, limit)])


@router.get("/{id_or_slug}")
def get_story(
    id_or_slug: str,
    db: Session = Depends(get_db),
    user: Optional[TokenUser] = Depends(get_optional_user),
):
    story = story_repo.get_story_by_id_or_slug(db, id_or_slug)
    if story is None:
        raise _story_not_found()
    if not story.published and not can_view_unpublished(user.role if user else None):
        raise _story_not_found()
    return envelope.ok(schemas.Story.model_validate(story))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_story(
    payload: schemas.StoryCreate,
    db: Session = Depends(get_db),
    user: TokenUser = Depends(require_content_manager),
):
    _ensure_event_exists(db, payload.event_id)
    story = story_repo.create_story(db, payload, default_author=user.username)
    logger.info("story_created: id=%s slug=%s by=%s", story.id, story.slug, user.username)
    return envelope.ok(schemas.Story.model_validate(story), "Story created successfully", status.HTTP_201_CREATED)


@router.put("/{story_id}")
def update_story(
    story_id: uuid.UUID,
    payload: schemas.StoryUpdate,
    db: Session = Depends(get_db),
    user: TokenUser = Depends(require_content_manager),
):
    story = _get_story_or_404(db, story_id)
    _ensure_event_exists(db, payload.event_id)
    story = story_repo.update_story(db, story, payload)
    logger.info("story_updated: id=%s slug=%s by=%s", story.id, story.slug, user.username)
    return envelope.ok(schemas.Story.model_validate(story), "Story updated successfully")


@router.delete("/{story_id}")
def delete_story(
    story_id: uuid.UUID,
    db: Session = Depends(get_db),
    user: TokenUser = Depends(require_content_manager),
):
    story = _get_story_or_404(db, story_id)
    story_repo.delete_story(db, story)
    logger.info("story_deleted: id=%s by=%s", story_id, user.username)
    return envelope.ok(message="Story deleted successfully")
