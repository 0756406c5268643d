"""Pydantic schema for configuration validation."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .defaults import (
    DEFAULT_FALLBACK_TIMEOUT,
    DEFAULT_HISTORY,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_ON_INVALIDATE,
)


class TailConfig(BaseModel):
    """Schema for tail engine configuration."""

    history: int = Field(
        default=DEFAULT_HISTORY,
        ge=0,
        description="Records replayed before following",
    )
    on_invalidate: Literal["reopen", "drain"] = Field(
        default=DEFAULT_ON_INVALIDATE,
        description="Reaction to source invalidation",
    )
    fallback_timeout: float = Field(
        default=DEFAULT_FALLBACK_TIMEOUT,
        gt=0,
        description="Wait timeout in seconds when the source cannot report one",
    )


class ExtractionConfig(BaseModel):
    """Schema for field extraction configuration."""

    max_attempts: int = Field(
        default=DEFAULT_MAX_ATTEMPTS,
        ge=1,
        description="Fetch attempts per field while the source is busy",
    )


class LoggingConfig(BaseModel):
    """Schema for diagnostic logging configuration."""

    level: str = Field(default=DEFAULT_LOG_LEVEL, description="Log level")
    file: Optional[str] = Field(default=None, description="Optional log file")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate and normalize the log level name."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if v.upper() not in valid_levels:
            raise ValueError(
                f"Invalid log level '{v}'. Must be one of: {', '.join(valid_levels)}"
            )
        return v.upper()


class JournalWatchConfig(BaseModel):
    """Root configuration schema."""

    tail: TailConfig = Field(default_factory=TailConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
