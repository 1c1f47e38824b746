"""Pydantic configuration models for offline-schedule.

This module defines the configuration models used by the CLI and scheduler.
For loading and merging logic, see loader.py.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class InvokeConfig(BaseModel):
    """Configuration for invoking local functions."""

    command: list[str] = Field(
        default_factory=lambda: ["sls", "invoke", "local"],
        description="Command prefix; --function and --data are appended per invocation",
    )
    working_dir: Path | None = Field(default=None, description="Working directory for the invocation process")
    timeout_seconds: float | None = Field(default=None, description="Per-invocation timeout (None = no limit)")

    @field_validator("command")
    @classmethod
    def validate_command(cls, v: list[str]) -> list[str]:
        """Require at least an executable."""
        if not v:
            raise ValueError("Invoke command must contain at least the executable name")
        return v

    model_config = {"extra": "forbid"}


class LoggingConfig(BaseModel):
    """Configuration for logging system."""

    level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log record format string",
    )

    model_config = {"extra": "forbid"}


class SchedulerConfig(BaseModel):
    """Root configuration for offline-schedule."""

    service_path: Path = Field(default=Path("serverless.yml"), description="Path to the serverless service file")
    timezone: str = Field(default="UTC", description="Timezone for cron triggers (e.g., 'America/Los_Angeles')")
    invoke: InvokeConfig = Field(default_factory=InvokeConfig, description="Function invocation settings")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Validate timezone is a valid IANA timezone identifier."""
        from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, KeyError, ValueError):
            raise ValueError(
                f"Invalid timezone '{v}'. Use IANA timezone identifiers "
                f"(e.g., 'America/Denver', 'Europe/London', 'UTC')."
            )
        return v

    model_config = {"extra": "forbid"}
