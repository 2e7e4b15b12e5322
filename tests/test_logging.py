"""Tests for logging setup."""

import logging
import sys
from pathlib import Path
from typing import Generator

import pytest
from rich.logging import RichHandler

from mage.core.logging import setup_logging


@pytest.fixture(autouse=True)
def restore_logging(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Put the root logger and excepthook back after each test."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    yield
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def test_console_level() -> None:
    """Test that the console shows warnings only unless debugging."""
    setup_logging()
    (handler,) = logging.getLogger().handlers
    assert isinstance(handler, RichHandler)
    assert handler.level == logging.WARNING

    setup_logging(debug=True)
    (handler,) = logging.getLogger().handlers
    assert handler.level == logging.DEBUG


def test_log_file(tmp_path: Path) -> None:
    """Test that the log file gets debug records and its directory is created."""
    log_file = tmp_path / "nested" / "mage.log"
    setup_logging(log_file=str(log_file))

    logging.getLogger("mage.test").debug("hello from the test")
    assert "hello from the test" in log_file.read_text()
    assert len(logging.getLogger().handlers) == 2


def test_excepthook_installed() -> None:
    """Test that uncaught exceptions are routed through logging."""
    previous = sys.excepthook
    setup_logging()
    assert sys.excepthook is not previous
