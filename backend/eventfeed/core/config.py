"""
Application configuration using pydantic-settings.
All config is loaded from environment variables with sensible defaults.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Eventbrite Event Feed"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    MODE: Literal["server", "setup"] = "server"
    STATIC_DIR: Path = PACKAGE_DIR / "static"
    CORS_ORIGINS: list[str] = ["*"]

    # Eventbrite
    API_KEY: str = ""
    EVENTBRITE_API_BASE: str = "https://www.eventbriteapi.com/v3"
    HTTP_TIMEOUT: float = 5.0  # httpx default

    # Setup mode: reuse this event instead of creating one
    EVENT_ID: Optional[str] = None

    model_config = {
        "env_file": ".env",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
