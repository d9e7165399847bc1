"""Logging configuration for the flashcard bot."""
import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Optional, Union

from vocadeck.config import settings


def setup_logging(first_message: str = "", level: Optional[Union[int, str]] = None) -> None:
    """Configure logging for the entire application.

    Args:
        first_message: Banner written once handlers are in place.
        level: Optional logging level. If None, LOG_LEVEL from the settings is used.
    """
    # Set default level if not provided
    if level is None:
        level = settings.logging.level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    formatter = logging.Formatter(settings.logging.format)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove any existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Add console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    root_logger.info("================================================")
    if first_message:
        root_logger.info(first_message)
    root_logger.info(f"Logging configured with level: {logging.getLevelName(level)}")

    # Add file handler with rotation
    log_dir = settings.logging.dir
    if log_dir:
        rotation = settings.logging.rotation
        interval = settings.logging.interval
        backup_count = settings.logging.backup_count
        try:
            path = Path(log_dir)
            path.mkdir(parents=True, exist_ok=True)

            log_file = path / "vocadeck.log"
            file_handler = TimedRotatingFileHandler(
                log_file,
                when=rotation,
                interval=interval,
                backupCount=backup_count,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

            root_logger.info(f"Log file: {log_file} (rotation: {rotation}, interval: {interval}, backup_count: {backup_count})")
        except OSError as e:
            root_logger.warning(f"Could not set up file logging: {e}")

    # Set logging levels for third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("telegram").setLevel(logging.WARNING)
    logging.getLogger("gtts").setLevel(logging.WARNING)
