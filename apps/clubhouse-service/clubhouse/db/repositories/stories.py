"""
Story repository functions.

Slugs are allocated on create and whenever the title changes. Allocation and
insert are not atomic, so a unique-constraint hit on the slug is retried with
a fresh allocation.
"""
from __future__ import annotations

import logging
import uuid
from typing import Callable, List, Optional, Tuple

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from clubhouse.db import models, schemas
from clubhouse.db.models import now_utc
from clubhouse.utils import slugs

logger = logging.getLogger(__name__)

SLUG_ALLOCATION_ATTEMPTS = 3


def _ordered(q):
    return q.options(selectinload(models.Story.event)).order_by(
        models.Story.publish_date.desc().nulls_last(),
        models.Story.created_at.desc(),
    )


def list_stories(
    db: Session,
    *,
    published_only: bool = True,
    story_type: Optional[str] = None,
    search: Optional[str] = None,
    skip: int = 0,
    limit: int = 10,
) -> Tuple[List[models.Story], int]:
    q = db.query(models.Story)
    if published_only:
        q = q.filter(models.Story.published.is_(True))
    if story_type:
        q = q.filter(models.Story.story_type == story_type)
    if search:
        pattern = f"%{search}%"
        q = q.filter(
            or_(
                models.Story.title.ilike(pattern),
                models.Story.excerpt.ilike(pattern),
                models.Story.content.ilike(pattern),
            )
        )
    total = q.count()
    return _ordered(q).offset(skip).limit(limit).all(), total


def get_featured_stories(db: Session, limit: int = 3) -> List[models.Story]:
    q = db.query(models.Story).filter(
        models.Story.published.is_(True),
        models.Story.featured_image_url.isnot(None),
        models.Story.featured_image_url != "",
    )
    return _ordered(q).limit(limit).all()


def get_recent_stories(db: Session, limit: int = 5) -> List[models.Story]:
    q = db.query(models.Story).filter(models.Story.published.is_(True))
    return _ordered(q).limit(limit).all()


def get_story(db: Session, story_id: uuid.UUID) -> Optional[models.Story]:
    return db.query(models.Story).filter(models.Story.id == story_id).first()


def get_story_by_id_or_slug(db: Session, identifier: str) -> Optional[models.Story]:
    q = db.query(models.Story).options(selectinload(models.Story.event))
    try:
        story_id = uuid.UUID(identifier)
    except ValueError:
        return q.filter(models.Story.slug == identifier).first()
    return q.filter(or_(models.Story.id == story_id, models.Story.slug == identifier)).first()


def _commit_with_slug_retry(db: Session, db_story: models.Story, title: str, apply: Callable[[], None]) -> None:
    """Allocate a slug for ``title``, apply pending changes and commit.

    On a unique-constraint hit for the allocated slug the session is rolled
    back and allocation is re-run, up to SLUG_ALLOCATION_ATTEMPTS times.
    """
    for attempt in range(1, SLUG_ALLOCATION_ATTEMPTS + 1):
        slug = slugs.allocate_slug(db, title)
        apply()
        db_story.slug = slug
        db.add(db_story)
        try:
            db.commit()
            return
        except IntegrityError:
            db.rollback()
            if attempt == SLUG_ALLOCATION_ATTEMPTS or not slugs.slug_exists(db, slug):
                raise
            logger.warning("slug_conflict: slug=%s attempt=%d; reallocating", slug, attempt)


def create_story(db: Session, story: schemas.StoryCreate, *, default_author: Optional[str] = None) -> models.Story:
    published = bool(story.published)
    db_story = models.Story()

    def apply():
        db_story.title = story.title
        db_story.excerpt = story.excerpt
        db_story.content = story.content
        db_story.story_type = story.story_type or 'news'
        db_story.featured_image_url = story.featured_image_url
        db_story.gallery_images = story.gallery_images
        db_story.author_name = story.author_name or default_author
        db_story.published = published
        db_story.publish_date = now_utc() if published else None
        db_story.event_id = story.event_id
        db_story.tags = list(story.tags or [])

    _commit_with_slug_retry(db, db_story, story.title, apply)
    db.refresh(db_story)
    return db_story


def update_story(db: Session, db_story: models.Story, story: schemas.StoryUpdate) -> models.Story:
    changes = story.model_dump(exclude_unset=True)
    # Required columns cannot be cleared by an explicit null
    for key in ("title", "content", "story_type"):
        if changes.get(key) is None:
            changes.pop(key, None)
    was_published = bool(db_story.published)

    def apply():
        for key, value in changes.items():
            if key == "published":
                continue
            setattr(db_story, key, value)
        if changes.get("published") is not None:
            db_story.published = changes["published"]
            if changes["published"] and not was_published:
                db_story.publish_date = now_utc()
            elif not changes["published"]:
                db_story.publish_date = None

    if "title" in changes:
        _commit_with_slug_retry(db, db_story, changes["title"], apply)
    else:
        apply()
        db.commit()
    db.refresh(db_story)
    return db_story


def delete_story(db: Session, db_story: models.Story) -> None:
    db.delete(db_story)
    db.commit()
