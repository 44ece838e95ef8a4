"""
Application configuration using Pydantic Settings.

The storage backend is selected by the STORAGE_BACKEND variable.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local", "test"] = "local"
    DEBUG: bool = True
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # ===========================================
    # Storage
    # ===========================================
    # Storage backend: "memory" | "json" | "sqlite"
    # - memory: process-local dict, lost on restart
    # - json: single JSON document under STORAGE_BASE_PATH
    # - sqlite: key/value table in DATABASE_URL
    STORAGE_BACKEND: Literal["memory", "json", "sqlite"] = "sqlite"
    DATABASE_URL: str = "sqlite+aiosqlite:///./sidecal.db"
    STORAGE_BASE_PATH: str = "./storage"
    STORAGE_FILE_NAME: str = "storage.json"

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )

    @property
    def is_sqlite(self) -> bool:
        """Check if the SQLite key/value store is selected."""
        return self.STORAGE_BACKEND == "sqlite"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
