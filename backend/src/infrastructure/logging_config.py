"""
Logging configuration for the application.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path

_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Marks handlers installed here so a second setup replaces them.
_HANDLER_TAG = "_splatstream_handler"

_QUIET_LOGGERS = ("urllib3", "httpcore", "httpx", "multipart", "uvicorn.access")


def _tagged(handler: logging.Handler, formatter: logging.Formatter) -> logging.Handler:
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_TAG, True)
    return handler


def setup_logging(level: str = "INFO", log_file: str = "") -> None:
    """Configure the root logger: stdout, plus *log_file* when given.

    Safe to call more than once; handlers from an earlier call are closed
    and replaced.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    root_logger = logging.getLogger()
    for handler in [h for h in root_logger.handlers if getattr(h, _HANDLER_TAG, False)]:
        root_logger.removeHandler(handler)
        handler.close()

    root_logger.setLevel(log_level)
    root_logger.addHandler(_tagged(logging.StreamHandler(sys.stdout), formatter))

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        root_logger.addHandler(
            _tagged(logging.FileHandler(log_file, encoding="utf-8"), formatter)
        )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
