"""Core functionality for handoff."""

from handoff.core.config import Config, LoggingConfig, QueueConfig, load_config
from handoff.core.logging import setup_logging, setup_logging_from_config
from handoff.core.queue import AsyncQueue, QueueClearedError, QueueError, QueueTimeoutError

__all__ = [
    "AsyncQueue",
    "Config",
    "LoggingConfig",
    "QueueClearedError",
    "QueueConfig",
    "QueueError",
    "QueueTimeoutError",
    "load_config",
    "setup_logging",
    "setup_logging_from_config",
]
