"""
File service.
Upload, lookup and deletion of shared PDFs on top of the metadata and blob stores.
"""

import logging
import uuid
from datetime import datetime, timezone

from fastapi import UploadFile

from pdfshare.config import settings
from pdfshare.errors import ClientInputError, NotFoundError, ServerError
from pdfshare.models import FileRecord
from pdfshare.utils import BlobStore, MetadataStore

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
CHUNK_SIZE = 1024 * 1024


class FileService:
    """Owns the stores for the lifetime of the process."""
    
    def __init__(
        self,
        metadata: MetadataStore,
        blobs: BlobStore,
        max_file_size: int = settings.MAX_FILE_SIZE,
    ):
        self.metadata = metadata
        self.blobs = blobs
        self.max_file_size = max_file_size
    
    async def upload(self, upload: UploadFile | None) -> FileRecord:
        """
        Validate an uploaded file and stream it into the blob store.
        
        The record is registered with size 0 before the body is copied
        and updated with the real size afterwards. On any failure both
        the record and the partial blob are removed.
        
        Raises:
            ClientInputError: no file, not a PDF, or over the size limit
            ServerError: writing the blob failed
        """
        if upload is None or not upload.filename:
            raise ClientInputError("No PDF file uploaded")
        if upload.content_type != PDF_CONTENT_TYPE:
            logger.warning(
                "Rejected upload %r with content type %r", upload.filename, upload.content_type
            )
            raise ClientInputError("Only PDF files are allowed!")
        
        file_id = str(uuid.uuid4())
        record = FileRecord(
            id=file_id,
            original_name=upload.filename,
            stored_name=self.blobs.stored_name(file_id, upload.filename),
            upload_date=datetime.now(timezone.utc),
            size=0,
        )
        self.metadata.put(record)
        
        try:
            size = await self._write_blob(upload, record.stored_name)
        except ClientInputError:
            await self._discard(record)
            raise
        except OSError as e:
            logger.exception("Failed to store upload %s", file_id)
            await self._discard(record)
            raise ServerError(f"Upload failed: {e}") from e
        
        record.size = size
        self.metadata.put(record)
        logger.info("Stored %s as %s (%d bytes)", record.original_name, record.stored_name, size)
        return record
    
    async def _write_blob(self, upload: UploadFile, stored_name: str) -> int:
        """Copy the upload body to disk in chunks. Returns the byte count."""
        size = 0
        async with self.blobs.open_write(stored_name) as out:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > self.max_file_size:
                    limit_mb = self.max_file_size // (1024 * 1024)
                    logger.warning("Rejected upload %r: over %dMB", upload.filename, limit_mb)
                    raise ClientInputError(f"File too large. Maximum size is {limit_mb}MB.")
                await out.write(chunk)
        return size
    
    async def _discard(self, record: FileRecord) -> None:
        """Forget a half-finished upload."""
        self.metadata.delete(record.id)
        try:
            await self.blobs.delete(record.stored_name)
        except OSError as e:
            logger.warning("Could not remove partial blob %s: %s", record.stored_name, e)
    
    def get(self, file_id: str) -> FileRecord:
        record = self.metadata.get(file_id)
        if record is None:
            raise NotFoundError("File not found")
        return record
    
    def list(self) -> list[FileRecord]:
        return self.metadata.list()
    
    async def get_with_blob(self, file_id: str) -> FileRecord:
        """
        Look up a record whose bytes are present on disk.
        
        Raises NotFoundError for an unknown id and, separately, when the
        record exists but its blob is missing from disk.
        """
        record = self.get(file_id)
        if not await self.blobs.exists(record.stored_name):
            raise NotFoundError("File not found on disk")
        return record
    
    async def delete(self, file_id: str) -> None:
        """
        Remove the blob, then the record.
        
        A blob that is already gone is not an error. If removing it fails
        the record is kept, since it is the only pointer to the file.
        """
        record = self.get(file_id)
        try:
            await self.blobs.delete(record.stored_name)
        except OSError as e:
            logger.exception("Failed to delete blob %s", record.stored_name)
            raise ServerError(f"Failed to delete file: {e}") from e
        self.metadata.delete(file_id)
        logger.info("Deleted %s (%s)", file_id, record.original_name)
