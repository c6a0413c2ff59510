"""
Application configuration and environment variables.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""
    
    # App settings
    APP_NAME: str = "PDF Share"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    
    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "3000"))
    
    # Storage
    UPLOAD_DIR: Path = Path(os.getenv("UPLOAD_DIR", "uploads"))
    STATIC_DIR: Path = Path(__file__).resolve().parent / "static"
    
    # Uploads
    UPLOAD_FIELD: str = "pdf"
    MAX_FILE_SIZE: int = 50 * 1024 * 1024  # 50MB
    
    # CORS
    CORS_ORIGINS: list = ["*"]


settings = Settings()
