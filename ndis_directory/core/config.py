"""
Core configuration module using Pydantic Settings.
"""
from typing import List, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Review storage backend: 'memory', 'file', 'sql' or 'hosted'
    REVIEW_BACKEND: str = "sql"

    # Database (sql backend)
    DATABASE_URL: str = "sqlite+aiosqlite:///./ndis_directory.db"

    # Flat-file storage
    REVIEWS_FILE: str = "./data/reviews.jsonl"
    SERVICES_FILE: str = "./data/services.json"

    # Hosted backend (PostgREST-style REST endpoint)
    HOSTED_URL: Optional[str] = None
    HOSTED_API_KEY: Optional[str] = None
    HOSTED_TIMEOUT: float = 10.0

    # API Configuration
    ADMIN_API_KEY: str = "change-me-in-production"
    CORS_ORIGINS: List[str] = ["http://localhost:3000"]

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Logging
    LOG_LEVEL: str = "INFO"

    # Application
    APP_NAME: str = "NDIS Provider Directory"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    @field_validator("REVIEW_BACKEND")
    @classmethod
    def validate_review_backend(cls, v: str) -> str:
        """Validate the review backend name."""
        allowed = ["memory", "file", "sql", "hosted"]
        v = v.lower()
        if v not in allowed:
            raise ValueError(f"REVIEW_BACKEND must be one of: {', '.join(allowed)}")
        return v

    @field_validator("DATABASE_URL")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        """Hosting providers hand out postgres:// URLs, asyncpg needs the driver prefix."""
        if v.startswith("postgres://"):
            return v.replace("postgres://", "postgresql+asyncpg://", 1)
        if v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v


# Global settings instance
settings = Settings()
