"""Business logic services package."""

from .uploads import UploadError, UploadStorage, get_upload_storage

__all__ = ["UploadError", "UploadStorage", "get_upload_storage"]
