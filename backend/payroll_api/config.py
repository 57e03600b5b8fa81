import logging
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


class Settings(BaseSettings):
    """Payroll API settings, read from the environment or a ``.env`` file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "RDC Payroll"
    app_version: str = "1.0.1"
    debug: bool = False
    environment: Literal["development", "staging", "production"] = "development"

    database_url: str = "postgresql+asyncpg://payroll:payroll@db:5432/payroll"
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # Frontend origins allowed to call the API (Next.js dev servers by default).
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:3001"]
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging for the API process and the CLI entry points."""
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    if settings.debug:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)
