"""Structured Logging — JSON formatter and setup for registration and chain logs.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (operator_kind, field, path, method, error_code, stage)
      surfaced when present
    - JSON format by default, human-readable when fmt="text"
    - setup_logging() is idempotent: repeated calls never stack handlers

Design Decisions:
    - Standard logging with a custom Formatter, configured once by the
      composition root
"""

import json
import logging
from datetime import datetime, timezone

EXTRA_FIELDS = (
    "operator_kind", "field", "path", "method", "error_code", "stage",
)


class JSONFormatter(logging.Formatter):
    """Format logs as JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


_HANDLER_NAME = "apibind"


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Configure the root logger. Returns the installed handler."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s — %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
