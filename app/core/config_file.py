"""Application configuration loaded from environment variables."""

from functools import lru_cache
from urllib.parse import quote_plus

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Environment
    ENV: str = "dev"
    DEBUG: bool = True

    # Database connection components
    # Defaults are for local development (outside Docker)
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = "devuser"
    POSTGRES_PASSWORD: str = "devpass"
    POSTGRES_DB: str = "orcho_dev"

    # Allow DATABASE_URL to be set directly, or construct from components
    DATABASE_URL: str | None = None

    @computed_field  # type: ignore[misc]
    @property
    def database_url(self) -> str:
        """Get database URL, either from DATABASE_URL env var or construct from components."""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        # URL encode every component in case it contains special characters
        encoded_user = quote_plus(str(self.POSTGRES_USER), safe="")
        encoded_password = quote_plus(str(self.POSTGRES_PASSWORD), safe="")
        encoded_host = quote_plus(str(self.POSTGRES_HOST), safe="")
        encoded_db = quote_plus(str(self.POSTGRES_DB), safe="")
        return (
            f"postgresql+psycopg2://{encoded_user}:{encoded_password}"
            f"@{encoded_host}:{self.POSTGRES_PORT}/{encoded_db}"
        )

    # Storage backend: "database" (SQLAlchemy) or "memory" (process-local, dev only)
    STORAGE_BACKEND: str = "database"

    # CORS
    CORS_ORIGINS: str = (
        "http://localhost:5173,http://localhost:3000,http://127.0.0.1:3000"
    )

    # Logging
    LOG_LEVEL: str = "INFO"  # INFO for dev, WARNING for prod
    LOG_FORMAT: str = "human"  # "human" for dev, "json" for prod

    # HTTP client (used by the CLI)
    API_BASE_URL: str = "http://localhost:8000"
    HTTP_TIMEOUT: float = 10.0

    model_config = SettingsConfigDict(
        env_file=[".env", "../.env"],  # Try .env in current dir first, then parent dir
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields from .env that are not in Settings
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
