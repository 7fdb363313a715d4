"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Values come from environment variables or a local .env file.

Files that USE this module:
- ezvrates.app (logging and cache configuration)
- ezvrates.adapters.providers.ezv (endpoint URLs and HTTP timeout)
- ezvrates.adapters.cache.* (cache file location)
- ezvrates.application.rates_service (cache TTL and time zone)

Files that this module USES:
- ezvrates.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from pathlib import Path  # Object-oriented filesystem paths
from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from ezvrates.shared.validators import validate_timezone  # Validate IANA time zone names

CACHE_BACKENDS = ("memory", "file")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Upstream endpoints ---
    daily_url: str = Field(
        default="https://www.backend-rates.bazg.admin.ch/api/xmldaily",
        alias="EZV_DAILY_URL",
    )
    avg_month_url: str = Field(
        default="https://www.backend-rates.bazg.admin.ch/api/xmlavgmonth",
        alias="EZV_AVG_MONTH_URL",
    )

    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)

    # --- Cache Settings ---
    cache_ttl_days: int = Field(default=7, alias="CACHE_TTL_DAYS", ge=1, le=365)
    cache_backend: str = Field(default="memory", alias="CACHE_BACKEND")
    cache_file: Path = Field(default=Path("./data/rates_cache.json"), alias="CACHE_FILE")

    # "Today" is decided in the publisher's time zone
    timezone: str = Field(default="Europe/Zurich", alias="EZV_TIMEZONE")

    # --- Logging ---
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="EZVRATES_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @field_validator("daily_url", "avg_month_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Endpoints must be absolute http(s) URLs."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Endpoint URL must start with http:// or https://")
        return v

    @field_validator("cache_backend")
    @classmethod
    def validate_cache_backend(cls, v: str) -> str:
        v = v.lower()
        if v not in CACHE_BACKENDS:
            raise ValueError(f"CACHE_BACKEND must be one of {', '.join(CACHE_BACKENDS)}")
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone_name(cls, v: str) -> str:
        if not validate_timezone(v):
            raise ValueError(f"Unknown time zone: {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError("LOG_LEVEL must be DEBUG, INFO, WARNING, ERROR or CRITICAL")
        return v


# Global settings instance
settings = Settings()
