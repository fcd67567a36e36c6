"""
Logging set-up for the portfolio service.

``setup_logging()`` is called once from ``app.main`` and attaches three
handlers to the root logger:

* stdout, coloured and human readable;
* ``logs/portfolio.log``, one JSON object per line, size-rotated;
* ``logs/portfolio-error.log``, same format, ERROR and above only.

Every record passes through :class:`RequestIDFilter`, which stamps it with
the id ``RequestIDMiddleware`` stored in :data:`request_id_ctx`.  Modules
only ever call ``logging.getLogger(__name__)``.
"""

import json
import logging
import os
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Optional

from app.core.config import settings

LOG_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "logs")
LOG_FILE = "portfolio.log"
ERROR_LOG_FILE = "portfolio-error.log"

request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class RequestIDFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = request_id_ctx.get()
        return True


def _utc(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


class JSONFormatter(logging.Formatter):
    """
    One JSON object per record, e.g.::

        {"timestamp": "2025-06-01T12:00:00.123+00:00", "level": "INFO",
         "logger": "app.services.share_verification_service",
         "message": "Share 3f2a... verified", "share_id": "3f2a...",
         "request_id": "9c1e..."}

    Attributes passed through ``extra=`` are copied when they are listed in
    ``EXTRA_FIELDS``.
    """

    EXTRA_FIELDS = ("request_id", "share_id", "method", "path", "status_code", "elapsed_ms")

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": _utc(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}.{record.funcName}:{record.lineno}",
        }
        entry.update(
            (name, getattr(record, name))
            for name in self.EXTRA_FIELDS
            if getattr(record, name, None) is not None
        )
        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """``time | LEVEL | logger [request] | message`` with the level coloured."""

    LEVEL_COLOURS = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        colour = self.LEVEL_COLOURS.get(record.levelno, "")
        request_id = getattr(record, "request_id", None)
        source = f"{record.name} [{request_id[:8]}]" if request_id else record.name
        line = " | ".join(
            (
                _utc(record).strftime("%Y-%m-%d %H:%M:%S"),
                f"{colour}{record.levelname:<8}{self.RESET}",
                source,
                record.getMessage(),
            )
        )
        if record.exc_info and record.exc_info[0] is not None:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _resolve_level() -> int:
    if settings.DEBUG:
        return logging.DEBUG
    # getLevelName maps a known name to its number and anything else to a str.
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    return level if isinstance(level, int) else logging.INFO


def _rotating_json_handler(path: str, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        filename=path,
        maxBytes=settings.LOG_FILE_MAX_BYTES,
        backupCount=settings.LOG_FILE_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(JSONFormatter())
    return handler


def setup_logging(log_dir: str = LOG_DIR) -> None:
    """Attach console and rotating file handlers; a no-op if the root logger is configured."""
    root = logging.getLogger()
    if root.handlers:
        return

    level = _resolve_level()
    root.setLevel(level)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(ConsoleFormatter())

    os.makedirs(log_dir, exist_ok=True)
    handlers = (
        console,
        _rotating_json_handler(os.path.join(log_dir, LOG_FILE), level),
        _rotating_json_handler(os.path.join(log_dir, ERROR_LOG_FILE), logging.ERROR),
    )
    request_ids = RequestIDFilter()
    for handler in handlers:
        handler.addFilter(request_ids)
        root.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.DEBUG if settings.DEBUG else logging.WARNING
    )

    root.info("Logging ready: level=%s dir=%s", logging.getLevelName(level), log_dir)
