"""handoff: an asyncio FIFO queue that hands values from producers to waiting consumers."""

from handoff.core import (
    AsyncQueue,
    Config,
    LoggingConfig,
    QueueClearedError,
    QueueConfig,
    QueueError,
    QueueTimeoutError,
    load_config,
    setup_logging,
    setup_logging_from_config,
)

__version__ = "0.1.0"

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
