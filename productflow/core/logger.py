from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys

from productflow_io.utils.log import SourceFileFilter
from productflow_io.utils.paths import DEFAULT_BASE


_LOGGER: logging.Logger | None = None


def _work_dir() -> Path:
    return DEFAULT_BASE


def get_logger(log_dir: Path | None = None) -> logging.Logger:
    """Return a configured application logger writing to ~/ProductFlow/logs/app.log.

    Creates the directory if needed. Uses rotating file handler. Records carry
    the uploaded file name when logged with ``extra={"source_file": ...}``.
    """
    global _LOGGER
    if _LOGGER is not None:
        return _LOGGER

    if log_dir is None:
        base = _work_dir() / "logs"
    else:
        base = Path(log_dir)
    base.mkdir(parents=True, exist_ok=True)
    log_path = base / "app.log"

    logger = logging.getLogger("productflow")
    logger.setLevel(logging.INFO)
    logger.propagate = False

    fmt = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s [%(source_file)s]: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = RotatingFileHandler(log_path, maxBytes=2 * 1024 * 1024, backupCount=3, encoding="utf-8")
    file_handler.setFormatter(fmt)
    file_handler.addFilter(SourceFileFilter())
    logger.addHandler(file_handler)

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(fmt)
    console.addFilter(SourceFileFilter())
    logger.addHandler(console)

    _LOGGER = logger
    return logger
