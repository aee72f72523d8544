"""Client configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

# Select the .env file for the current environment
_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Load .env file early to populate os.environ before creating nested settings
# This is necessary because Pydantic nested BaseSettings don't inherit env_file
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


class ApiSettings(BaseSettings):
    """Registration endpoint configuration."""

    base_url: str = Field(
        "https://ismp.crpt.ru",
        description="Scheme and host of the registration API",
    )
    create_document_path: str = Field(
        "/api/v3/lk/documents/create",
        description="Path of the document creation endpoint",
    )
    timeout_seconds: float = Field(
        30.0,
        description="HTTP timeout for a single submission in seconds",
        gt=0,
    )
    document_format: str = Field(
        "MANUAL",
        description="Value of the document_format field in create requests",
    )
    document_type: str = Field(
        "LP_INTRODUCE_GOODS",
        description="Value of the type field in create requests",
    )

    model_config = SettingsConfigDict(
        env_prefix="CRPT_",
        case_sensitive=False,
    )


class GateSettings(BaseSettings):
    """Admission gate configuration."""

    request_limit: int = Field(
        10,
        description="Maximum number of grants per window",
        ge=1,
    )
    window_seconds: float = Field(
        1.0,
        description="Delay after which a granted slot is released",
        gt=0,
        allow_inf_nan=False,
    )
    close_grace_seconds: float = Field(
        5.0,
        description="How long close() waits for pending releases before cancelling them",
        ge=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="GATE_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Log format: json or plain")
    output: str = Field("stdout", description="Log output: stdout or file")
    file_path: str | None = Field(
        None,
        description="Log file path when output is 'file'",
    )
    max_bytes: int = Field(
        0,
        description="Rotate the log file after this many bytes (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(
        5,
        description="Number of rotated log files to keep",
        ge=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


def _build_api_settings() -> ApiSettings:
    return ApiSettings()


def _build_gate_settings() -> GateSettings:
    return GateSettings()


def _build_log_settings() -> LogSettings:
    return LogSettings()


class Settings(BaseSettings):
    """Main settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if settings are out of range.
    """

    app_env: str = APP_ENV
    api: ApiSettings = Field(default_factory=_build_api_settings)
    gate: GateSettings = Field(default_factory=_build_gate_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
# Nested settings are created via default_factory so env loading works.
settings = Settings()
