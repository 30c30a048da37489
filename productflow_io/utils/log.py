"""Logging helpers for the productflow_io package."""

# Module responsibilities:
# - Centralize logging configuration with file + stream handlers.
# - Provide get_logger() that ensures directories exist and configuration occurs once.
# - Stamp every record with the uploaded file it concerns ("-" when none).

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

DEFAULT_LOG_BASE = Path.home() / "ProductFlow" / "logs"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s (%(source_file)s) - %(message)s"
_LOG_CONFIGURED = False


class SourceFileFilter(logging.Filter):
    """Default ``source_file`` for records logged without one."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "source_file"):
            record.source_file = "-"
        return True


def _resolve_log_dir(log_dir: Optional[Path] = None) -> Path:
    """Resolve the log directory, ensuring existence."""
    target = log_dir or DEFAULT_LOG_BASE
    target.mkdir(parents=True, exist_ok=True)
    return target


def _configure_logging(log_dir: Optional[Path] = None) -> None:
    """Configure package logging once with rotating file + console handlers."""
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED:
        return

    directory = _resolve_log_dir(log_dir)
    log_path = directory / "productflow_io.log"

    formatter = logging.Formatter(
        fmt=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = logging.handlers.RotatingFileHandler(
        log_path, maxBytes=2_000_000, backupCount=3, encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    file_handler.addFilter(SourceFileFilter())
    file_handler.setLevel(logging.INFO)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(SourceFileFilter())
    console_handler.setLevel(logging.WARNING)

    package_logger = logging.getLogger("productflow_io")
    package_logger.setLevel(logging.INFO)
    package_logger.addHandler(file_handler)
    package_logger.addHandler(console_handler)
    package_logger.propagate = False

    _LOG_CONFIGURED = True


def get_logger(name: str, log_dir: Optional[Path] = None) -> logging.Logger:
    """Return a package-scoped logger.

    Args:
        name: Logger name suffix appended to the package root logger namespace.
        log_dir: Optional override for the logging directory.

    Returns:
        Configured logger scoped under ``productflow_io``.
    """

    _configure_logging(log_dir)
    return logging.getLogger(f"productflow_io.{name}")
