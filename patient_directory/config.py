"""
Application Configuration

Loads environment variables using pydantic-settings.
All settings can be overridden via a .env file or environment variables.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parent.parent
_ENV_FILE = PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    PATIENTS_PATH: str = "data/patients.json"
    DEFAULT_PAGE_SIZE: int = 20
    STRICT_QUERY_VALIDATION: bool = False
    STATIC_DIR: str = "static"
    CORS_ORIGINS: list[str] = ["*"]
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=str(_ENV_FILE), extra="ignore")


settings = Settings()
