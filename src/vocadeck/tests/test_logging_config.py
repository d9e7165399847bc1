"""Tests for logging configuration."""
import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from unittest.mock import patch

import pytest

from vocadeck.config import settings
from vocadeck.logging_config import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Put the root logger back the way pytest set it up."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(level)


def file_handlers() -> list:
    return [h for h in logging.getLogger().handlers if isinstance(h, TimedRotatingFileHandler)]


@pytest.mark.parametrize("log_dir", [None, ""])
def test_no_file_logging_without_log_dir(log_dir) -> None:
    """Test that an unset or blank LOG_DIR logs to the console only."""
    with patch.object(settings.logging, "dir", log_dir):
        setup_logging("test", level="INFO")

    assert file_handlers() == []
    assert logging.getLogger().level == logging.INFO


def test_file_logging_with_log_dir(tmp_path: Path) -> None:
    """Test that LOG_DIR adds a rotating log file."""
    log_dir = tmp_path / "logs"
    with patch.object(settings.logging, "dir", str(log_dir)):
        setup_logging("test", level="DEBUG")

    handlers = file_handlers()
    assert len(handlers) == 1
    assert Path(handlers[0].baseFilename) == log_dir / "vocadeck.log"
    assert logging.getLogger("telegram").level == logging.WARNING
