"""Configuration: loads and caches application settings from the environment."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


PROJECT_ROOT = Path(__file__).resolve().parents[4]


def _load_environment() -> None:
    """Load `.env` from the project root, then `ENV_FILE` on top of it if set.

    Real environment variables always win over the base file.
    """
    base = PROJECT_ROOT / ".env"
    if base.is_file():
        load_dotenv(base, override=False, encoding="utf-8")

    extra = os.getenv("ENV_FILE")
    if extra:
        extra_path = Path(extra)
        if not extra_path.is_absolute():
            extra_path = PROJECT_ROOT / extra_path
        if extra_path.is_file():
            load_dotenv(extra_path, override=True, encoding="utf-8")


_load_environment()


class Settings(BaseSettings):
    """
    All runtime settings of the explorer API. Every field can be overridden
    through the environment variable named by its alias.
    """

    project_name: str = Field(default="File Explorer API", alias="PROJECT_NAME")
    api_v1_str: str = Field(default="/api/v1", alias="API_V1_STR")
    debug: bool = Field(default=False, alias="DEBUG")

    database_url: Optional[str] = Field(default=None, alias="DATABASE_URL")
    database_host: str = Field(default="localhost", alias="DATABASE_HOST")
    database_port: int = Field(default=5432, alias="DATABASE_PORT")
    database_user: str = Field(default="postgres", alias="DATABASE_USER")
    database_password: str = Field(default="postgres", alias="DATABASE_PASSWORD")
    database_name: str = Field(default="file_explorer", alias="DATABASE_NAME")
    database_echo: bool = Field(default=False, alias="DATABASE_ECHO")
    seed_sample_data: bool = Field(default=False, alias="SEED_SAMPLE_DATA")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="log", alias="LOG_DIR")
    log_file_name: str = Field(default="app.log", alias="LOG_FILE_NAME")
    log_json: bool = Field(default=False, alias="LOG_JSON")
    app_port: int = Field(default=8000, alias="APP_PORT")
    timezone: str = Field(default="UTC", alias="TIMEZONE")

    cors_origins_raw: str = Field(default="*", alias="CORS_ORIGINS")

    # Used by the navigation client when talking to a running server
    client_base_url: str = Field(default="http://127.0.0.1:8000/api/v1", alias="CLIENT_BASE_URL")
    client_timeout: float = Field(default=10.0, alias="CLIENT_TIMEOUT")

    model_config = SettingsConfigDict(extra="ignore")

    @property
    def sql_database_url(self) -> str:
        """Full SQLAlchemy URL; ``DATABASE_URL`` wins over the split fields."""
        if self.database_url:
            return self.database_url
        return URL.create(
            "postgresql+psycopg2",
            username=self.database_user,
            password=self.database_password,
            host=self.database_host,
            port=self.database_port,
            database=self.database_name,
        ).render_as_string(hide_password=False)

    @property
    def log_directory(self) -> Path:
        """Absolute log directory; relative values are resolved against the project root."""
        path = Path(self.log_dir)
        return path if path.is_absolute() else PROJECT_ROOT / path

    @property
    def log_file_path(self) -> Path:
        return self.log_directory / self.log_file_name

    @property
    def timezone_info(self) -> ZoneInfo:
        """Configured timezone, falling back to UTC when it cannot be resolved."""
        try:
            return ZoneInfo(self.timezone)
        except ZoneInfoNotFoundError:
            return ZoneInfo("UTC")

    @property
    def cors_origins(self) -> list[str]:
        raw = (self.cors_origins_raw or "").strip()
        return [item.strip() for item in raw.split(",") if item.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings object, parsed once."""
    return Settings()
