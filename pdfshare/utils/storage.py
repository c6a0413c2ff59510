"""
Storage utilities.
Metadata lives in memory (can be swapped for a database later),
file bytes live in a directory on local disk.
"""

import re
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import AsyncIterator, Dict, List, Optional

import aiofiles
import aiofiles.os

from pdfshare.models import FileRecord

# Only short alphanumeric extensions survive into a stored name
_EXTENSION_RE = re.compile(r"^\.[A-Za-z0-9]{1,16}$")
_STORED_NAME_RE = re.compile(
    r"^(?P<id>[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12})"
    r"(?P<ext>\.[A-Za-z0-9]{1,16})?$"
)


class MetadataStore(ABC):
    """Interface for FileRecord storage, keyed by file id."""

    @abstractmethod
    def get(self, file_id: str) -> Optional[FileRecord]:
        ...

    @abstractmethod
    def put(self, record: FileRecord) -> None:
        ...

    @abstractmethod
    def delete(self, file_id: str) -> bool:
        ...

    @abstractmethod
    def list(self) -> List[FileRecord]:
        ...


class InMemoryMetadataStore(MetadataStore):
    """
    Process-lifetime metadata storage.
    
    Not locked: each record is written by the request that created it
    and removed only by an explicit delete. Known limitation: a delete
    racing with a view or download of the same id may let that read
    either succeed or return not-found. For durability or multiple
    instances, implement MetadataStore on top of a database instead.
    """
    
    def __init__(self):
        self._records: Dict[str, FileRecord] = {}
    
    def get(self, file_id: str) -> Optional[FileRecord]:
        """Retrieve a record by ID."""
        return self._records.get(file_id)
    
    def put(self, record: FileRecord) -> None:
        """Insert or replace a record."""
        self._records[record.id] = record
    
    def delete(self, file_id: str) -> bool:
        """Delete a record by ID."""
        if file_id in self._records:
            del self._records[file_id]
            return True
        return False
    
    def list(self) -> List[FileRecord]:
        """All records in insertion order."""
        return list(self._records.values())


class BlobStore:
    """
    Directory of uploaded file bytes, one file per identifier.
    
    Stored names are built here from the server-generated id and are
    checked again before any path is resolved, so client-supplied text
    never reaches the filesystem. File I/O goes through aiofiles and
    runs off the event loop.
    """
    
    def __init__(self, root: Path):
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)
    
    @staticmethod
    def stored_name(file_id: str, original_name: str) -> str:
        """Build the disk name for a file: id plus the original extension."""
        file_id = str(uuid.UUID(file_id))
        extension = Path(original_name or "").suffix
        if not _EXTENSION_RE.match(extension):
            extension = ""
        return f"{file_id}{extension}"
    
    def path(self, stored_name: str) -> Path:
        """Resolve a stored name to its location inside the blob directory."""
        if not _STORED_NAME_RE.match(stored_name):
            raise ValueError(f"Invalid stored name: {stored_name!r}")
        path = (self.root / stored_name).resolve()
        if path.parent != self.root:
            raise ValueError(f"Stored name escapes blob directory: {stored_name!r}")
        return path
    
    async def exists(self, stored_name: str) -> bool:
        return await aiofiles.os.path.isfile(self.path(stored_name))
    
    async def size(self, stored_name: str) -> int:
        return await aiofiles.os.path.getsize(self.path(stored_name))
    
    def open_write(self, stored_name: str):
        """Open a blob for writing (``async with``), truncating anything already there."""
        return aiofiles.open(self.path(stored_name), "wb")
    
    async def iter_chunks(self, stored_name: str, chunk_size: int = 64 * 1024) -> AsyncIterator[bytes]:
        """Yield the blob's bytes in order."""
        async with aiofiles.open(self.path(stored_name), "rb") as f:
            while True:
                chunk = await f.read(chunk_size)
                if not chunk:
                    break
                yield chunk
    
    async def delete(self, stored_name: str) -> bool:
        """Remove a blob. Returns False when it was already gone."""
        try:
            await aiofiles.os.remove(self.path(stored_name))
        except FileNotFoundError:
            return False
        return True
