"""
PDF Share API
FastAPI application entry point.
"""

import logging
from urllib.parse import quote

from fastapi import Depends, FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse, StreamingResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from pdfshare.config import settings
from pdfshare.errors import NotFoundError, PDFShareError
from pdfshare.models import DeleteResponse, ErrorResponse, FileRecord, UploadResponse
from pdfshare.services import PDF_CONTENT_TYPE, FileService
from pdfshare.utils import BlobStore, InMemoryMetadataStore

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Upload PDF documents and share them by link",
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.state.file_service = FileService(
    metadata=InMemoryMetadataStore(),
    blobs=BlobStore(settings.UPLOAD_DIR),
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_file_service(request: Request) -> FileService:
    """Process-wide file service; override in tests."""
    return request.app.state.file_service


@app.exception_handler(PDFShareError)
async def pdfshare_error_handler(request: Request, exc: PDFShareError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(status_code=400, content={"error": message})


@app.get("/health")
async def health():
    """Health check for deployment."""
    return {"status": "ok"}


@app.post("/api/upload", response_model=UploadResponse, responses=ERROR_RESPONSES)
async def upload_pdf(
    request: Request,
    upload: UploadFile | None = File(None, alias=settings.UPLOAD_FIELD, description="PDF file"),
    service: FileService = Depends(get_file_service),
):
    """
    Upload a PDF and get back its id and share link.
    
    The file must be sent as multipart field ``pdf`` with content type
    ``application/pdf``.
    """
    record = await service.upload(upload)
    return UploadResponse(
        success=True,
        file_id=record.id,
        original_name=record.original_name,
        size=record.size,
        share_url=str(request.url_for("share_page", file_id=record.id)),
    )


@app.get("/api/file/{file_id}", response_model=FileRecord, responses=ERROR_RESPONSES)
async def get_file(file_id: str, service: FileService = Depends(get_file_service)):
    """Metadata for one file."""
    return service.get(file_id)


@app.get("/api/files", response_model=list[FileRecord])
async def list_files(service: FileService = Depends(get_file_service)):
    """Metadata for every stored file."""
    return service.list()


@app.get("/share/{file_id}")
async def share_page(file_id: str, service: FileService = Depends(get_file_service)):
    """Viewer page for a shared file. The page loads its data from the API."""
    try:
        service.get(file_id)
    except NotFoundError:
        return PlainTextResponse("File not found", status_code=404)
    return FileResponse(settings.STATIC_DIR / "share.html", media_type="text/html")


def _content_disposition(disposition: str, filename: str) -> str:
    quoted = quote(filename)
    if quoted != filename:
        return f"{disposition}; filename*=utf-8''{quoted}"
    return f'{disposition}; filename="{filename}"'


async def _pdf_response(service: FileService, file_id: str, disposition: str) -> StreamingResponse:
    """Stream the whole blob. Range requests are not honoured."""
    record = await service.get_with_blob(file_id)
    size = await service.blobs.size(record.stored_name)
    return StreamingResponse(
        service.blobs.iter_chunks(record.stored_name),
        media_type=PDF_CONTENT_TYPE,
        headers={
            "Content-Disposition": _content_disposition(disposition, record.original_name),
            "Content-Length": str(size),
        },
    )


@app.get("/api/view/{file_id}", responses=ERROR_RESPONSES)
async def view_pdf(file_id: str, service: FileService = Depends(get_file_service)):
    """Send the PDF for display in the browser."""
    return await _pdf_response(service, file_id, "inline")


@app.get("/api/download/{file_id}", responses=ERROR_RESPONSES)
async def download_pdf(file_id: str, service: FileService = Depends(get_file_service)):
    """Send the PDF as an attachment."""
    return await _pdf_response(service, file_id, "attachment")


@app.delete("/api/file/{file_id}", response_model=DeleteResponse, responses=ERROR_RESPONSES)
async def delete_file(file_id: str, service: FileService = Depends(get_file_service)):
    """Delete the stored PDF and its metadata."""
    await service.delete(file_id)
    return DeleteResponse(success=True, message="File deleted successfully")


# Static mounts go last so the API routes above take precedence
app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")
app.mount("/", StaticFiles(directory=settings.STATIC_DIR, html=True), name="static")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
