"""
Data models and schemas for shared PDF files.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FileRecord(BaseModel):
    """Metadata for one uploaded PDF."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    original_name: str = Field(alias="originalName")   # Client filename, display only
    stored_name: str = Field(alias="storedName")       # Name of the blob on disk
    upload_date: datetime = Field(alias="uploadDate")
    size: int = 0                                       # Set once the stream completes


class UploadResponse(BaseModel):
    """Response from the upload endpoint."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    file_id: str = Field(alias="fileId")
    original_name: str = Field(alias="originalName")
    size: int
    share_url: str = Field(alias="shareUrl")


class DeleteResponse(BaseModel):
    success: bool
    message: str


class ErrorResponse(BaseModel):
    error: str
