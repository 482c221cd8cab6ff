from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_FILE = "pdf_fetch.log"

PACKAGE_LOGGER = "pdf_fetch"


def _level_from_env() -> int:
    name = (os.getenv("PDF_FETCH_LOG_LEVEL") or "INFO").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def add_file_handler(log_dir: Union[str, Path]) -> RotatingFileHandler:
    """
    Attach a rotating logs/pdf_fetch.log (5 MB x 3) to the package logger.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        log_dir / LOG_FILE,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger(PACKAGE_LOGGER).addHandler(handler)
    return handler


def _configure_package_logger() -> logging.Logger:
    root = logging.getLogger(PACKAGE_LOGGER)
    if root.handlers:
        return root

    root.setLevel(_level_from_env())

    # stderr keeps warnings next to curl's own progress output
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(stream_handler)

    # Files only on request: a plain run writes nothing but the PDF
    log_dir: Optional[str] = os.getenv("PDF_FETCH_LOG_DIR")
    if log_dir:
        add_file_handler(log_dir)

    return root


def get_logger(name: str) -> logging.Logger:
    """
    Return the `pdf_fetch.<name>` logger.

    All of them share the handlers of the `pdf_fetch` logger, set up on
    first use. PDF_FETCH_LOG_LEVEL picks the level (default INFO) and
    PDF_FETCH_LOG_DIR, when set, adds a rotating log file there.
    """
    _configure_package_logger()
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


__all__ = ["get_logger", "add_file_handler", "LOG_FORMAT", "LOG_FILE"]
