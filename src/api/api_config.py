# This file defines runtime settings for the film library API in one place.
# It exists so host, database, session tokens, and query strategy can be configured without code edits.
# The config loader reads environment variables and applies safe defaults for local development.
# Session tokens are validated at load time so a typo in a capability fails startup, not a request.

from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

CAPABILITY_FULL = "full"
CAPABILITY_READ_ONLY = "read_only"
SUPPORTED_CAPABILITIES = frozenset({CAPABILITY_FULL, CAPABILITY_READ_ONLY})

DEFAULT_SESSION_TOKENS = "token_admin:full,token_user:read_only"


class ApiConfig(BaseModel):
    """Typed API runtime configuration."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    api_name: str = "Film Library API"
    app_version: str = "0.1.0"
    host: str = "0.0.0.0"
    port: int = 8080
    environment: str = "local"
    database_url: str
    db_pool_size: int = 5
    allowed_origins: list[str] = Field(default_factory=list)
    session_cookie_name: str = "session_id"
    session_tokens: dict[str, str] = Field(default_factory=dict)
    filmography_strategy: Literal["per_actor", "joined"] = "per_actor"
    enable_metrics: bool = True

    @field_validator("session_tokens")
    @classmethod
    def validate_session_tokens(cls, value: dict[str, str]) -> dict[str, str]:
        for token, capability in value.items():
            if not token:
                raise ValueError("Session tokens cannot be empty.")
            if capability not in SUPPORTED_CAPABILITIES:
                supported = ", ".join(sorted(SUPPORTED_CAPABILITIES))
                raise ValueError(f"Unsupported capability {capability!r}. Supported: {supported}")
        return value

    @field_validator("port", "db_pool_size")
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Value must be greater than 0.")
        return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"{name} must be boolean-like, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_list(name: str, default: list[str] | None = None) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default or [])
    return [item.strip() for item in raw.split(",") if item.strip()]


def parse_session_tokens(raw: str) -> dict[str, str]:
    """Parse `token:capability` pairs separated by commas."""

    tokens: dict[str, str] = {}
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue
        token, separator, capability = item.partition(":")
        if not separator:
            raise ValueError(f"Session token entry must look like 'token:capability', got {item!r}")
        tokens[token.strip()] = capability.strip()
    return tokens


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Load API configuration from `.env` and process environment."""

    if load_env:
        load_dotenv()

    config_values: dict[str, object] = {
        "api_name": os.getenv("API_NAME", "Film Library API"),
        "app_version": os.getenv("APP_VERSION", "0.1.0"),
        "host": os.getenv("API_HOST", "0.0.0.0"),
        "port": _env_int("API_PORT", 8080),
        "environment": os.getenv("ENV", "local"),
        "database_url": os.getenv("DATABASE_URL", ""),
        "db_pool_size": _env_int("API_DB_POOL_SIZE", 5),
        "allowed_origins": _env_list("API_ALLOWED_ORIGINS", []),
        "session_cookie_name": os.getenv("API_SESSION_COOKIE_NAME", "session_id"),
        "session_tokens": parse_session_tokens(
            os.getenv("API_SESSION_TOKENS") or DEFAULT_SESSION_TOKENS
        ),
        "filmography_strategy": os.getenv("API_FILMOGRAPHY_STRATEGY", "per_actor"),
        "enable_metrics": _env_bool("API_ENABLE_METRICS", True),
    }
    if not config_values["database_url"]:
        raise RuntimeError("DATABASE_URL is required for API startup.")

    return ApiConfig.model_validate(config_values)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    """Cached accessor for API config."""

    return load_api_config()
