"""Logging configuration for core_loss_analyzer.

Library modules only call :func:`get_logger`; nothing is printed unless the
application (the CLI, a notebook) calls :func:`configure_logging`.

Usage:
    from core_loss_analyzer.util.logging import configure_logging, get_logger

    configure_logging(level="DEBUG")
    logger = get_logger(__name__)
    logger.info("Loss computed: %.3g W/m^3", loss)
"""

from __future__ import annotations

import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Optional


_root_logger_name = "core_loss_analyzer"

logging.getLogger(_root_logger_name).addHandler(logging.NullHandler())


class ConsoleFormatter(logging.Formatter):
    """Human-readable console format with optional color."""

    LEVEL_COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_color: bool = True):
        super().__init__()
        self.use_color = use_color and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname
        if self.use_color:
            color = self.LEVEL_COLORS.get(level, "")
            level_str = f"{color}{level:8}{self.RESET}"
        else:
            level_str = f"{level:8}"
        name = record.name.replace(f"{_root_logger_name}.", "")
        base = f"[{ts}] {level_str} [{name}] {record.getMessage()}"
        if record.exc_info:
            base += "\n" + "".join(traceback.format_exception(*record.exc_info))
        return base


def configure_logging(*, level: Optional[str] = None, use_color: bool = True) -> None:
    """Attach a stderr handler to the package logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to the
               CORE_LOSS_LOG_LEVEL environment variable, else WARNING.
        use_color: Whether to colorize console output (auto-disabled if not a TTY).

    Calling it again replaces the handler installed by a previous call.
    """
    if level is None:
        level = os.environ.get("CORE_LOSS_LOG_LEVEL", "WARNING")
    numeric_level = getattr(logging, str(level).upper(), logging.WARNING)

    logger = logging.getLogger(_root_logger_name)
    logger.setLevel(numeric_level)

    for handler in logger.handlers[:]:
        if not isinstance(handler, logging.NullHandler):
            logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(ConsoleFormatter(use_color=use_color))
    logger.addHandler(console_handler)

    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the core_loss_analyzer namespace."""
    if not name.startswith(_root_logger_name):
        if name == "__main__":
            name = f"{_root_logger_name}.main"
        else:
            name = f"{_root_logger_name}.{name}"
    return logging.getLogger(name)
