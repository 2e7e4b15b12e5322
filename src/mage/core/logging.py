"""Logging configuration for mage.

Console output goes through rich; an optional log file receives every
record at DEBUG level in a plain format.

Example:
    ```python
    from mage.core.logging import setup_logging

    setup_logging(debug=True, log_file="~/.cache/mage/mage.log")

    import logging
    logger = logging.getLogger(__name__)
    logger.info("Linked %s", target)
    ```
"""

import logging
import sys
from pathlib import Path
from types import TracebackType
from typing import Optional, Type

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    debug: bool = False,
    log_file: Optional[str] = None,
    log_format: str = LOG_FORMAT,
) -> None:
    """Set up logging for a mage run.

    Args:
        debug: Show DEBUG records on the console, with source paths and
            local variables in tracebacks. Otherwise only warnings and
            errors reach the console, since results are already printed.
        log_file: Optional path to a log file. ``~`` is expanded and the
            parent directory is created.
        log_format: Format string for the log file.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers.clear()

    console_handler = RichHandler(
        console=console,
        show_path=debug,
        enable_link_path=debug,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=debug,
    )
    console_handler.setLevel(logging.DEBUG if debug else logging.WARNING)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(log_format))
        root_logger.addHandler(file_handler)

    logger = logging.getLogger(__name__)
    logger.debug("Logging initialized (debug=%s)", debug)
    if log_file:
        logger.debug("Log file: %s", log_file)

    def handle_exception(
        exc_type: Type[BaseException],
        exc_value: BaseException,
        exc_traceback: Optional[TracebackType],
    ) -> None:
        """Log uncaught exceptions instead of printing a bare traceback."""
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        logger.critical(
            "Uncaught exception",
            exc_info=(exc_type, exc_value, exc_traceback),
        )

    sys.excepthook = handle_exception
