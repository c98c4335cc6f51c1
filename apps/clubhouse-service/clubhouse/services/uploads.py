"""
Upload storage: local-disk persistence for images and documents.

Files land in the uploads directory under a generated name
``<field>-<millis>-<random><ext>`` and are served back as ``/uploads/<name>``.
"""

import logging
import random
import re
import time
from pathlib import Path
from typing import List, Optional, Sequence

from fastapi import UploadFile

from clubhouse.db import schemas
from clubhouse.utils import config

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = frozenset({
    'image/jpeg',
    'image/jpg',
    'image/png',
    'image/gif',
    'image/webp',
    'application/pdf',
    'application/msword',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
    'application/vnd.ms-excel',
    'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
})

CHUNK_SIZE = 1024 * 1024
PUBLIC_PREFIX = "/uploads"

_SAFE_EXTENSION = re.compile(r"^\.[A-Za-z0-9]{1,10}$")


class UploadError(Exception):
    """An upload was refused; ``status_code`` is the HTTP status to report."""

    def __init__(self, message: str, status_code: int = 400):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class UploadStorage:
    """Stores uploads in ``directory`` and resolves stored names back to paths."""

    def __init__(self, directory: Path, max_bytes: int = config.MAX_UPLOAD_BYTES):
        self.directory = Path(directory).resolve()
        self.max_bytes = max_bytes

    def _generate_name(self, field_name: str, original_name: Optional[str]) -> str:
        ext = Path(original_name or "").suffix
        if not _SAFE_EXTENSION.match(ext):
            ext = ""
        millis = int(time.time() * 1000)
        return f"{field_name}-{millis}-{random.randint(0, 10**9)}{ext}"

    def save(self, upload: UploadFile, field_name: str) -> schemas.UploadedFile:
        """Validate the MIME type, then stream ``upload`` to disk in chunks.

        Raises UploadError (400) for a disallowed type and (413) once the size
        limit is crossed; a partially written file is removed.
        """
        mimetype = (upload.content_type or "").lower()
        if mimetype not in ALLOWED_MIME_TYPES:
            raise UploadError("Invalid file type. Only images and documents are allowed.", 400)

        self.directory.mkdir(parents=True, exist_ok=True)
        filename = self._generate_name(field_name, upload.filename)
        target = self.directory / filename
        size = 0
        try:
            with open(target, "wb") as out:
                while True:
                    chunk = upload.file.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > self.max_bytes:
                        raise UploadError("File too large. Maximum size is 10MB.", 413)
                    out.write(chunk)
        except UploadError:
            target.unlink(missing_ok=True)
            raise

        logger.info("file_stored: filename=%s size=%d mimetype=%s", filename, size, mimetype)
        return schemas.UploadedFile(
            filename=filename,
            original_name=upload.filename or filename,
            mimetype=mimetype,
            size=size,
            url=f"{PUBLIC_PREFIX}/{filename}",
        )

    def save_many(self, uploads: Sequence[UploadFile], field_name: str) -> List[schemas.UploadedFile]:
        """Store every upload or none of them."""
        if len(uploads) > config.MAX_FILES_PER_REQUEST:
            raise UploadError(f"Too many files. Maximum is {config.MAX_FILES_PER_REQUEST}.", 400)
        stored: List[schemas.UploadedFile] = []
        try:
            for upload in uploads:
                stored.append(self.save(upload, field_name))
        except UploadError:
            for item in stored:
                (self.directory / item.filename).unlink(missing_ok=True)
            raise
        return stored

    def resolve(self, filename: str) -> Path:
        """Map a stored name to its path, refusing anything outside the directory.

        Containment is checked before existence: a name that escapes the
        directory raises UploadError(403) whether or not the target exists.
        """
        candidate = (self.directory / filename).resolve()
        if candidate == self.directory or not candidate.is_relative_to(self.directory):
            raise UploadError("Access denied", 403)
        if not candidate.is_file():
            raise UploadError("File not found", 404)
        return candidate


def get_upload_storage() -> UploadStorage:
    """FastAPI dependency; the directory is re-read so it can be changed at runtime."""
    return UploadStorage(config.uploads_dir())
