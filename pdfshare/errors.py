"""
Error types raised by the file service and rendered by the API.
"""

from fastapi import status


class PDFShareError(Exception):
    """Base error carrying the HTTP status it maps to."""
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ClientInputError(PDFShareError):
    """Missing file, wrong content type or oversized body."""
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(PDFShareError):
    """Unknown identifier, or the blob is gone from disk."""
    status_code = status.HTTP_404_NOT_FOUND


class ServerError(PDFShareError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
