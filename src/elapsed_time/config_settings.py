"""Settings model for elapsed-time."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils.logging import resolve_level


class Config(BaseSettings):
    """Logging and operation-level configuration using pydantic-settings."""

    model_config = SettingsConfigDict(
        env_prefix="ELAPSED_TIME_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True,
    )

    # Logging
    log_level: str = Field(default="INFO", description="Console log level")
    log_file: Path | None = Field(
        default=None, description="Optional JSON log file (rotated at 10MB)"
    )
    json_logs: bool = Field(
        default=False, description="Render console logs as JSON lines"
    )

    # Levels used by levelled operations
    completion_level: str = Field(
        default="INFO", description="Level of events for completed operations"
    )
    abandonment_level: str = Field(
        default="WARNING", description="Level of events for abandoned operations"
    )

    @field_validator("log_level", "completion_level", "abandonment_level", mode="before")
    @classmethod
    def validate_level(cls, v: Any) -> str:
        """Normalize a level name, rejecting unknown levels."""
        if not isinstance(v, str):
            msg = f"Level must be a string, got {type(v).__name__}"
            raise ValueError(msg)
        normalized = v.strip().upper()
        resolve_level(normalized)
        return normalized

    @field_validator("log_file", mode="before")
    @classmethod
    def parse_log_file(cls, v: Any) -> Path | None:
        """Convert string to Path, treating empty values as unset."""
        if v is None or v == "":
            return None
        if isinstance(v, str | Path):
            return Path(v).expanduser()
        msg = f"log_file must be string or Path, got {type(v).__name__}"
        raise ValueError(msg)

    @property
    def completion_level_no(self) -> int:
        return resolve_level(self.completion_level)

    @property
    def abandonment_level_no(self) -> int:
        return resolve_level(self.abandonment_level)
