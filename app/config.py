"""Application configuration."""

from functools import lru_cache
from typing import Literal, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def load_env_file() -> None:
    """Load a .env file from the working directory into the environment."""
    load_dotenv(find_dotenv(usecwd=True))


# Load environment variables
load_env_file()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(extra="ignore")

    # API Settings
    api_title: str = "School Forms"
    api_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    # Backend Settings
    backend_base_url: str = "http://localhost:3000"
    # Seconds; None disables the timeout
    backend_timeout: Optional[float] = None
    options_cache_ttl: float = 30.0

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("backend_timeout", mode="before")
    @classmethod
    def _empty_timeout_is_none(cls, value):
        if value == "":
            return None
        return value

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
