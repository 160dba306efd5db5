import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)
_STORAGE_BACKENDS = frozenset({"database", "json"})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Equipment Registry API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    cors_origins: list[str] = ["http://localhost:4200"]

    # Persistence: "database" (SQLAlchemy) or "json" (local cache mirror)
    storage_backend: str = "database"
    database_url: str = "sqlite:///./data/equipment.db"
    json_cache_file: str = "data/assets.json"
    settings_file: str = "data/settings.json"

    # Roster & scheduling
    page_size: int = 9
    due_soon_days: int = 30
    recent_days: int = 7
    min_manufacture_year: int = 1950

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine: SQL queries
    log_level_http: str = "WARNING"          # httpx / httpcore
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_compliance: str = "INFO"       # scheduler, validator, query engine

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        """Fall back to the database backend on an unknown storage setting."""
        if self.storage_backend not in _STORAGE_BACKENDS:
            _config_logger.warning(
                "Unknown storage backend %r, using 'database'", self.storage_backend
            )
            object.__setattr__(self, "storage_backend", "database")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance: reads .env once."""
    return Settings()
