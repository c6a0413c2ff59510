"""
Models package - data structures and schemas.
"""

from pdfshare.models.schemas import (
    FileRecord,
    UploadResponse,
    DeleteResponse,
    ErrorResponse,
)

__all__ = [
    "FileRecord",
    "UploadResponse",
    "DeleteResponse",
    "ErrorResponse",
]
