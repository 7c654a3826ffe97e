"""Pydantic configuration models for handoff queues.

Loading and merging live in loader.py.
"""

from pydantic import BaseModel, Field, field_validator


class QueueConfig(BaseModel):
    """Configuration for a single AsyncQueue."""

    name: str = Field(default="queue", description="Queue label used in logs")
    default_timeout_ms: int | None = Field(
        default=None,
        description="Timeout for next() calls that pass none (None or 0 waits indefinitely)",
    )

    @field_validator("default_timeout_ms")
    @classmethod
    def validate_timeout(cls, v: int | None) -> int | None:
        """Reject negative timeouts."""
        if v is not None and v < 0:
            raise ValueError(f"default_timeout_ms must be >= 0, got {v}")
        return v


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    directory: str = Field(default="logs", description="Directory for log files")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB before rotation")
    backup_count: int = Field(default=5, description="Number of backup log files to keep")
    file_logging: bool = Field(default=False, description="Also write logs to a rotating file")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"Invalid logging level '{v}'. Must be one of {sorted(allowed)}")
        return v.upper()


class Config(BaseModel):
    """Root configuration."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")
    queue: QueueConfig = Field(default_factory=QueueConfig)

    model_config = {"extra": "allow"}
