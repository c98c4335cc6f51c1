"""
Upload API endpoints.

Single and multi-file uploads for signed-in officers, event document uploads
for content managers, and raw file download with a path containment check.
"""
import logging
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.orm import Session

from clubhouse.api import envelope
from clubhouse.api.deps import get_current_user, require_content_manager
from clubhouse.db import schemas
from clubhouse.db.database import get_db
from clubhouse.db.repositories import events as event_repo
from clubhouse.services.uploads import UploadError, UploadStorage, get_upload_storage
from clubhouse.utils.token_crypto import TokenUser

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/upload", tags=["uploads"])


def _http_error(exc: UploadError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.message)


@router.post("", status_code=status.HTTP_201_CREATED)
def upload_file(
    file: Optional[UploadFile] = File(default=None),
    storage: UploadStorage = Depends(get_upload_storage),
    user: TokenUser = Depends(get_current_user),
):
    if file is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")
    try:
        stored = storage.save(file, "file")
    except UploadError as exc:
        raise _http_error(exc)
    logger.info("file_uploaded: filename=%s size=%d by=%s", stored.filename, stored.size, user.username)
    return envelope.ok(stored, "File uploaded successfully", status.HTTP_201_CREATED)


@router.post("/multiple", status_code=status.HTTP_201_CREATED)
def upload_files(
    files: Optional[List[UploadFile]] = File(default=None),
    storage: UploadStorage = Depends(get_upload_storage),
    user: TokenUser = Depends(get_current_user),
):
    if not files:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No files uploaded")
    try:
        stored = storage.save_many(files, "files")
    except UploadError as exc:
        raise _http_error(exc)
    logger.info("files_uploaded: count=%d by=%s", len(stored), user.username)
    return envelope.ok(stored, "Files uploaded successfully", status.HTTP_201_CREATED)


@router.post("/events/{event_id}/documents", status_code=status.HTTP_201_CREATED)
def upload_event_document(
    event_id: uuid.UUID,
    document: Optional[UploadFile] = File(default=None),
    file: Optional[UploadFile] = File(default=None),
    document_type: Optional[str] = Form(default=None, alias="documentType", max_length=50),
    db: Session = Depends(get_db),
    storage: UploadStorage = Depends(get_upload_storage),
    user: TokenUser = Depends(require_content_manager),
):
    upload = document or file
    if upload is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No document uploaded")
    if event_repo.get_event(db, event_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    try:
        stored = storage.save(upload, "document")
    except UploadError as exc:
        raise _http_error(exc)
    record = event_repo.create_event_document(
        db,
        event_id=event_id,
        document_name=stored.original_name,
        document_type=(document_type or "").strip() or "general",
        file_url=stored.url,
        file_size_bytes=stored.size,
        mime_type=stored.mimetype,
    )
    logger.info("event_document_uploaded: id=%s event_id=%s filename=%s by=%s", record.id, event_id, stored.filename, user.username)
    return envelope.ok(schemas.EventDocument.model_validate(record), "Event document uploaded successfully", status.HTTP_201_CREATED)


@router.get("/files/{filename}")
def serve_file(filename: str, storage: UploadStorage = Depends(get_upload_storage)):
    try:
        path = storage.resolve(filename)
    except UploadError as exc:
        if exc.status_code == status.HTTP_403_FORBIDDEN:
            logger.warning("upload_access_denied: filename=%r", filename)
        raise _http_error(exc)
    return FileResponse(path)
