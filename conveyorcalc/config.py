"""Application configuration using pydantic-settings."""

import logging
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from CONVEYORCALC_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="CONVEYORCALC_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    LOG_LEVEL: str = "INFO"

    # Gearmotor catalog JSON; None uses the catalog shipped with the package
    CATALOG_PATH: Optional[str] = None

    DEFAULT_SPEED_TOLERANCE_PCT: float = 15.0

    MODEL_VERSION_ID: str = "belt_conveyor_v1.0"

    # serve command
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8000

    # CORS
    CORS_ORIGINS: list[str] = ["*"]


settings = Settings()


def get_settings() -> Settings:
    return settings


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging once for CLI and API entry points."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(levelname)s:%(name)s: %(message)s",
    )
