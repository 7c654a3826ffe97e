"""Logging configuration and setup for handoff."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from handoff.core.config.models import LoggingConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO",
    directory: str | Path = "logs",
    max_size_mb: int = 10,
    backup_count: int = 5,
    file_logging: bool = False,
) -> None:
    """Configure the root logger with a console handler and an optional rotating file.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        directory: Directory for the log file.
        max_size_mb: Maximum size in MB before rotation.
        backup_count: Number of backup files to keep.
        file_logging: Whether to also write to <directory>/handoff.log.
    """
    numeric_level = getattr(logging, level.upper())
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(numeric_level)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if file_logging:
        log_dir = Path(directory)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / "handoff.log",
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.info(f"Logging initialized: level={level}, file_logging={file_logging}")


def setup_logging_from_config(config: LoggingConfig) -> None:
    """Configure logging from a LoggingConfig section."""
    setup_logging(
        level=config.level,
        directory=config.directory,
        max_size_mb=config.max_size_mb,
        backup_count=config.backup_count,
        file_logging=config.file_logging,
    )


def get_queue_logger(queue_name: str) -> logging.Logger:
    """Get the logger for a named queue.

    Args:
        queue_name: Name of the queue.

    Returns:
        Logger under the ``handoff.queue`` namespace.
    """
    return logging.getLogger(f"handoff.queue.{queue_name}")
