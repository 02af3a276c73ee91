"""Configuration management for the script-facing AWS bridge."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

_config_logger = logging.getLogger(__name__)


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Python logging level name")
    file: str | None = Field(default=None, description="Optional log file path")


class ExecutionSettings(BaseModel):
    call_timeout_seconds: float = Field(
        default=60.0,
        ge=1,
        le=3600,
        description="Default deadline applied to every script call.",
    )
    connect_timeout_seconds: float = Field(default=10.0, ge=1, le=300)
    transfer_chunk_size: int = Field(default=1024 * 1024, ge=4 * 1024, le=64 * 1024 * 1024)
    max_page_size: int = Field(default=1000, ge=1, le=1000)
    max_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="botocore total attempts per API call, retries included.",
    )


class InvalidationSettings(BaseModel):
    caller_reference_prefix: str = Field(default="script-cf-invalidation", min_length=1)
    caller_reference_mode: Literal["unique", "timestamp"] = Field(
        default="unique",
        description=(
            "unique: timestamp plus random token. "
            "timestamp: seconds only, collides for calls within the same second."
        ),
    )

    @field_validator("caller_reference_prefix")
    @classmethod
    def _strip_prefix(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("caller_reference_prefix must not be blank")
        return value


class Settings(BaseModel):
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    execution: ExecutionSettings = Field(default_factory=ExecutionSettings)
    invalidation: InvalidationSettings = Field(default_factory=InvalidationSettings)


ENV_KEYS = {
    "log_level": "LOG_LEVEL",
    "log_file": "LOG_FILE",
    "call_timeout": "CALL_TIMEOUT_SECONDS",
    "connect_timeout": "SDK_CONNECT_TIMEOUT_SECONDS",
    "chunk_size": "TRANSFER_CHUNK_SIZE",
    "max_page_size": "MAX_PAGE_SIZE",
    "max_attempts": "SDK_MAX_ATTEMPTS",
    "reference_prefix": "CALLER_REFERENCE_PREFIX",
    "reference_mode": "CALLER_REFERENCE_MODE",
}


def _project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        _config_logger.warning(
            "Invalid integer value for %s: %r, using default %d", key, value, default
        )
        return default


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        _config_logger.warning(
            "Invalid float value for %s: %r, using default %s", key, value, default
        )
        return default


def load_settings() -> Settings:
    """Load configuration and cache the result."""

    return _load_settings_cached()


@lru_cache(maxsize=1)
def _load_settings_cached() -> Settings:
    load_dotenv(dotenv_path=_project_root() / ".env")
    log_file_env = os.getenv(ENV_KEYS["log_file"])

    settings_data: dict[str, object] = {
        "logging": {
            "level": os.getenv(ENV_KEYS["log_level"], LoggingSettings().level),
            "file": str(Path(log_file_env).expanduser()) if log_file_env else None,
        },
        "execution": {
            "call_timeout_seconds": _env_float(
                ENV_KEYS["call_timeout"],
                ExecutionSettings().call_timeout_seconds,
            ),
            "connect_timeout_seconds": _env_float(
                ENV_KEYS["connect_timeout"],
                ExecutionSettings().connect_timeout_seconds,
            ),
            "transfer_chunk_size": _env_int(
                ENV_KEYS["chunk_size"],
                ExecutionSettings().transfer_chunk_size,
            ),
            "max_page_size": _env_int(
                ENV_KEYS["max_page_size"],
                ExecutionSettings().max_page_size,
            ),
            "max_attempts": _env_int(
                ENV_KEYS["max_attempts"],
                ExecutionSettings().max_attempts,
            ),
        },
        "invalidation": {
            "caller_reference_prefix": os.getenv(
                ENV_KEYS["reference_prefix"],
                InvalidationSettings().caller_reference_prefix,
            ),
            "caller_reference_mode": os.getenv(
                ENV_KEYS["reference_mode"],
                InvalidationSettings().caller_reference_mode,
            ).strip().lower(),
        },
    }

    try:
        return Settings.model_validate(settings_data)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid configuration: {exc}") from exc
