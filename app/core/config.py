"""
Configuration settings for the QC Dashboard API
"""
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # App
    PROJECT_NAME: str = "QC Dashboard API"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=False)

    # Database
    DATABASE_URL: str = Field(
        default="sqlite+aiosqlite:///./qc_dashboard.db",
        description="Database connection URL - set via environment variable in production"
    )
    DB_ECHO: bool = Field(default=False)

    # Admin gate & JWT
    ADMIN_PASSWORD: str = Field(default="admin")
    SECRET_KEY: str = Field(default="change-me-in-production")
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 12  # 12 hours

    # CORS
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000"]
    )

    # Logging
    LOG_DIR: str = Field(default="logs")

    # Dashboard
    TOP_REP_WINDOW_DAYS: int = Field(default=7)


settings = Settings()
