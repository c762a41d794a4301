"""
Logging Configuration Module

All loggers live under the ``xactestate`` namespace and share one set of
handlers (console, plus a file when ``XACT_LOG_FILE`` is set). The API also
writes one access line per request to ``xactestate.access``.

Usage:
    from xactestate.logging_config import setup_logging, get_logger

    setup_logging()  # once, at startup
    logger = get_logger(__name__)
"""

import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

from xactestate.config import get_config

PACKAGE_LOGGER = "xactestate"
ACCESS_LOGGER = f"{PACKAGE_LOGGER}.access"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Third-party loggers kept at WARNING
NOISY_LOGGERS = ("werkzeug", "urllib3", "flask_cors")

_logging_configured = False


def _build_handlers(level: int, log_file: Optional[str]) -> List[logging.Handler]:
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    return handlers


def setup_logging(
    level: Optional[str] = None,
    log_file: Optional[str] = None,
    force: bool = False,
) -> None:
    """Configure the package logger.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL (any case).
            Defaults to ``XACT_LOG_LEVEL``.
        log_file: Also log to this file. Defaults to ``XACT_LOG_FILE``.
        force: Reconfigure even if logging was already set up.
    """
    global _logging_configured

    if _logging_configured and not force:
        return

    settings = get_config().logging
    numeric_level = getattr(logging, (level or settings.level).upper(), logging.INFO)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(numeric_level)
    _close_handlers(package_logger)
    for handler in _build_handlers(numeric_level, log_file or settings.log_file):
        package_logger.addHandler(handler)
    package_logger.propagate = False

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _logging_configured = True


def get_logger(name: str) -> logging.Logger:
    """Logger for ``name``, placed under the package namespace."""
    if not _logging_configured:
        setup_logging()

    if not name.startswith(PACKAGE_LOGGER):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def register_request_logging(app) -> None:
    """Log ``METHOD path -> status (ms)`` for every request handled by ``app``.

    Client errors are logged at WARNING, server errors at ERROR.
    """
    from flask import g, request

    access_logger = get_logger(ACCESS_LOGGER)

    @app.before_request
    def _start_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def _log_request(response):
        started = g.get("request_started")
        elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO
        access_logger.log(
            level, "%s %s -> %d (%.1f ms)",
            request.method, request.path, response.status_code, elapsed_ms,
        )
        return response


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def reset_logging() -> None:
    """Drop the package handlers so the next call sets logging up again."""
    global _logging_configured
    _logging_configured = False
    _close_handlers(logging.getLogger(PACKAGE_LOGGER))
