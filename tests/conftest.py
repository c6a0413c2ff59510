"""Shared fixtures: an isolated file service and a TestClient wired to it."""

import os
import tempfile
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# The app creates its default blob directory at import time
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="pdfshare_"))

from pdfshare.main import app, get_file_service  # noqa: E402
from pdfshare.services import FileService  # noqa: E402
from pdfshare.utils import BlobStore, InMemoryMetadataStore  # noqa: E402

PDF_BYTES = b"%PDF-1.4\n\n"


@pytest.fixture()
def service(tmp_path) -> FileService:
    return FileService(
        metadata=InMemoryMetadataStore(),
        blobs=BlobStore(tmp_path / "uploads"),
    )


@pytest.fixture()
def client(service) -> Generator[TestClient, None, None]:
    """TestClient whose handlers all share the ``service`` fixture."""
    app.dependency_overrides[get_file_service] = lambda: service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
def upload(client):
    """Upload helper returning the parsed response body."""
    def _upload(name: str = "a.pdf", content: bytes = PDF_BYTES, content_type: str = "application/pdf"):
        resp = client.post("/api/upload", files={"pdf": (name, content, content_type)})
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _upload
