"""
Utilities package.
"""

from pdfshare.utils.storage import BlobStore, InMemoryMetadataStore, MetadataStore

__all__ = [
    "BlobStore",
    "InMemoryMetadataStore",
    "MetadataStore",
]
