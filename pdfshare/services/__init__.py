"""
Services package - business logic.
"""

from pdfshare.services.files import FileService, PDF_CONTENT_TYPE

__all__ = [
    "FileService",
    "PDF_CONTENT_TYPE",
]
