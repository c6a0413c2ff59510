"""
Entry point for deployment.
Imports the FastAPI app from the pdfshare package.
"""

from pdfshare.config import settings
from pdfshare.main import app

if __name__ == "__main__":
    import uvicorn
    print(f"PDF Sharing Server running on http://localhost:{settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
