"""
Yacht class API endpoints.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from clubhouse.api import envelope
from clubhouse.api.deps import require_content_manager
from clubhouse.db import schemas
from clubhouse.db.database import get_db
from clubhouse.db.repositories import races as race_repo
from clubhouse.utils.token_crypto import TokenUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/yacht-classes", tags=["yacht-classes"])


@router.get("")
def list_yacht_classes(db: Session = Depends(get_db)):
    return envelope.ok([schemas.YachtClass.model_validate(c) for c in race_repo.list_yacht_classes(db)])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_yacht_class(
    payload: schemas.YachtClassCreate,
    db: Session = Depends(get_db),
    user: TokenUser = Depends(require_content_manager),
):
    if race_repo.get_yacht_class_by_name(db, payload.name):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Yacht class already exists")
    yacht_class = race_repo.create_yacht_class(db, payload)
    logger.info("yacht_class_created: id=%s name=%r by=%s", yacht_class.id, yacht_class.name, user.username)
    return envelope.ok(schemas.YachtClass.model_validate(yacht_class), "Yacht class created successfully", status.HTTP_201_CREATED)
