"""Application configuration.

Loads settings from environment variables with sensible defaults.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API
    project_name: str = "Trailer Store API"
    api_version: str = "1.0.0"
    debug: bool = False

    # "production" hides internal error messages from 500 responses
    environment: str = "development"

    # Database
    database_url: str = "postgresql+asyncpg://trailers:trailers_dev_password@db:5432/trailers"

    # Requests
    max_body_bytes: int = 10 * 1024 * 1024
    cors_origins: list[str] = ["*"]

    # Catalog
    default_page_size: int = 10
    max_page_size: int = 100
    max_page: int = 1_000_000
    slug_max_attempts: int = 1000

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    class Config:
        """Pydantic configuration."""

        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def is_production(self) -> bool:
        """Whether the service runs in hardened mode."""
        return self.environment.lower() == "production"


settings = Settings()
