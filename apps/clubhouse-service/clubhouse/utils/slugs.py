"""
URL slug allocation for stories.

Allocation probes the stories table for each candidate in turn. The probe and
the later insert are not atomic; the unique constraint on ``stories.slug`` is
what finally guarantees uniqueness, and callers retry allocation when an
insert hits it (see ``clubhouse.db.repositories.stories``).
"""
from __future__ import annotations

import re

from sqlalchemy.orm import Session

from clubhouse.db import models

FALLBACK_SLUG = "story"

# Taken by fixed routes under /api/stories
RESERVED_SLUGS = frozenset({"featured", "recent"})

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_title(title: str) -> str:
    """Lowercase, collapse every run of non ``[a-z0-9]`` characters into one hyphen, trim hyphens."""
    base = _NON_ALNUM.sub("-", (title or "").lower()).strip("-")
    return base or FALLBACK_SLUG


def slug_exists(db: Session, slug: str) -> bool:
    if slug in RESERVED_SLUGS:
        return True
    return db.query(models.Story.id).filter(models.Story.slug == slug).first() is not None


def allocate_slug(db: Session, title: str) -> str:
    """Return the first unused slug among ``base``, ``base-1``, ``base-2``, ..."""
    base = normalize_title(title)
    slug = base
    counter = 1
    while slug_exists(db, slug):
        slug = f"{base}-{counter}"
        counter += 1
    return slug
