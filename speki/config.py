"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - Every setting has a default: the service runs with no environment at all

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - api_prefix applied once in main.py; route modules declare only their resource path
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from speki.core.domain_types import DEFAULT_CATEGORY


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Cards
    default_category: str = DEFAULT_CATEGORY

    # API
    api_prefix: str = "/api/v1"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("api_prefix", mode="before")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        """'api/v1/' and '/api/v1' are the same prefix."""
        if isinstance(v, str):
            v = "/" + v.strip("/")
            return "" if v == "/" else v
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
