"""
rebook_reviews.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Hide secrets from repr/logging (e.g., JWT secret).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="REBOOK_", case_sensitive=False)

    # dev/test create tables on startup; prod expects an existing schema.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "rebook-reviews"
    log_level: str = "INFO"
    # JSON lines for log shipping; set REBOOK_LOG_JSON=false for a readable dev console.
    log_json: bool = True

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Auth (tokens are issued by the account service; we only validate them)
    jwt_alg: str = "HS256"
    jwt_issuer: str = "rebook-accounts"
    jwt_audience: str = "rebook-api"
    jwt_secret: str = Field(default="dev-secret-change-me-0123456789abcdef", repr=False)

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./rebook.db"

    # Review listing
    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=100, ge=1)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()
