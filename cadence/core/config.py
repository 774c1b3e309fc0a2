"""Configuration module for the Cadence backend."""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Application
    APP_NAME: str = "Cadence Queue API"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    # Server
    SERVER_HOST: str = "127.0.0.1"
    SERVER_PORT: int = 8080

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./cadence.db"
    DATABASE_ECHO: bool = False

    # CORS
    CORS_ENABLED: bool = True
    CORS_ORIGINS: list[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str | None = None

    # Caller identity, set by the auth proxy in front of the API
    USER_ID_HEADER: str = "X-User-Id"

    class Config:
        """Pydantic config."""

        env_file = ".env"
        case_sensitive = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
