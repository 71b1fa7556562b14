"""Application configuration via Pydantic Settings.

All configuration is loaded from environment variables following 12-factor principles.
"""

import re
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Jurisdiction
    timezone: str = Field(
        default="America/Indiana/Indianapolis",
        description="IANA timezone used for local submission deadlines",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            msg = f"Unknown timezone: {v!r}"
            raise ValueError(msg) from exc
        return v

    # Open Door Law
    open_door_notice_hours: int = Field(
        default=48,
        description="Minimum elapsed hours between notice posting and meeting start",
        ge=0,
    )

    # Publication
    default_submission_lead_days: int = Field(
        default=3,
        description="Days before publication a notice is due when no newspaper schedule is known",
        ge=0,
    )
    default_submission_time: str = Field(
        default="17:00",
        description="Local time of day (HH:MM) used for fallback submission deadlines",
    )

    @field_validator("default_submission_time")
    @classmethod
    def validate_submission_time(cls, v: str) -> str:
        if not re.fullmatch(r"([01]\d|2[0-3]):[0-5]\d", v):
            msg = "default_submission_time must be HH:MM (24-hour)"
            raise ValueError(msg)
        return v

    publication_scan_days: int = Field(
        default=60,
        description="Maximum days scanned when resolving a newspaper publication date",
        gt=0,
        le=366,
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_dir: str | None = Field(
        default=None,
        description="Directory for log files (enables file logging with 24h rotation when set)",
    )

    # Environment
    environment: str = Field(
        default="production",
        description="Deployment environment name (e.g. production, dev, staging)",
    )

    # API
    api_v1_prefix: str = Field(
        default="/api/v1",
        description="API version prefix",
    )

    @property
    def tzinfo(self) -> ZoneInfo:
        """Return the configured timezone as a ``ZoneInfo``."""
        return ZoneInfo(self.timezone)


def get_settings() -> Settings:
    """Create and return application settings."""
    return Settings()
