"""Application configuration loaded from config.yaml + environment variables."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings

_CONFIG_PATH = Path(os.environ.get(
    "CIVICHUB_CONFIG",
    Path(__file__).resolve().parent.parent / "config.yaml",
))

_DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///data/civichub.db"


def _load_yaml() -> dict:
    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH) as f:
            return yaml.safe_load(f) or {}
    return {}


class PaginationConfig(BaseSettings):
    default_limit: int = 10
    max_limit: int = 100


class AuthConfig(BaseSettings):
    session_max_age_days: int = 7
    min_password_length: int = 6


class Settings(BaseSettings):
    database_url: str = _DEFAULT_DATABASE_URL
    log_level: str = "INFO"
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "CIVICHUB_"}


@lru_cache
def get_settings() -> Settings:
    """Build Settings from YAML defaults; CIVICHUB_* environment variables win."""
    y = _load_yaml()
    overrides = {}
    db_url = y.get("database", {}).get("url")
    if db_url and "CIVICHUB_DATABASE_URL" not in os.environ:
        overrides["database_url"] = db_url
    if "log_level" in y and "CIVICHUB_LOG_LEVEL" not in os.environ:
        overrides["log_level"] = y["log_level"]
    if "cors_origins" in y:
        overrides["cors_origins"] = y["cors_origins"]
    return Settings(
        pagination=PaginationConfig(**y.get("pagination", {})),
        auth=AuthConfig(**y.get("auth", {})),
        **overrides,
    )
