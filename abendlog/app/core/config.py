"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore", # Allow extra env vars without failing
    )

    # Ports and URLs
    abendlog_backend_port: int = 8000
    frontend_url: str = "http://localhost:3000"
    backend_url: str = "http://localhost:8000"

    # App
    app_name: str = "Abend Log"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_prefix: str = "/api/v1"
    # Default for local frontend; override via ALLOWED_ORIGINS env for cloud
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Archive database (backs the GET /logs load source)
    database_url: str = "sqlite+aiosqlite:///./abendlog.db"
    database_pool_size: int = 5
    database_max_overflow: int = 10

    # Log load source. None means "this service" (backend_url).
    log_source_url: Optional[str] = None
    log_source_timeout_seconds: float = 10.0

    # Start with the three sample abends in the store and archive
    seed_sample_logs: bool = True

    @property
    def resolved_log_source_url(self) -> str:
        return (self.log_source_url or self.backend_url).rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
