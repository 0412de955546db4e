"""
Application configuration — Pydantic Settings.

Loads from .env with strict validation. Single source of truth
for connection credentials, timeouts and logging.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from widget_finder.core.database import DatabaseCredentials


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Application ──────────────────────────────────────────────
    APP_NAME: str = "WidgetFinder"
    APP_ENV: str = "development"
    DEBUG: bool = False

    # ── API server ───────────────────────────────────────────────
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8000

    # ── Catalog Database ─────────────────────────────────────────
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_NAME: str = "feed_fm"
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    # Full SQLAlchemy URL; when set, replaces the DB_* credentials.
    DB_URL: Optional[str] = None

    # Seconds; 0 disables the timeout.
    DB_CONNECT_TIMEOUT: int = 10
    DB_QUERY_TIMEOUT: int = 30

    # ── Pagination ───────────────────────────────────────────────
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 500

    # ── Logging ──────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""

    # ── Credential builders ──────────────────────────────────────

    @property
    def db_credentials(self) -> DatabaseCredentials:
        return DatabaseCredentials(
            host=self.DB_HOST,
            user=self.DB_USER,
            password=self.DB_PASSWORD,
            database=self.DB_NAME,
            port=self.DB_PORT,
        )

    @property
    def connect_timeout(self) -> Optional[int]:
        return self.DB_CONNECT_TIMEOUT or None

    @property
    def query_timeout(self) -> Optional[int]:
        return self.DB_QUERY_TIMEOUT or None


@lru_cache
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()


settings = get_settings()
