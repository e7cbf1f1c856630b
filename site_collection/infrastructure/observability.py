"""Structured Logging — JSON log lines for every site list transition.

Invariants:
    - Every line carries timestamp, level, logger name and message
    - Site fields (operation, site_count, delta, folder_id, error_code, location)
      appear only when set on the record
    - setup_logging is idempotent: calling it twice never doubles output

Design Decisions:
    - stdlib logging + JSONFormatter: the store emits one event per mutation,
      no need for a structured-logging dependency
    - operation_extra builds the `extra=` dict so call sites stay one line
"""

import logging
import json
from collections.abc import Sized
from datetime import datetime, timezone

_EXTRA_FIELDS: tuple[str, ...] = (
    "operation", "site_count", "delta", "folder_id", "error_code", "location",
)
_HANDLER_NAME = "site_collection"


class JSONFormatter(logging.Formatter):
    """Render a log record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        line = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            value = record.__dict__.get(key)
            if value is not None:
                line[key] = value
        if record.exc_info:
            line["exception"] = self.formatException(record.exc_info)
        return json.dumps(line, ensure_ascii=False)


def operation_extra(
    operation: str, before: Sized, after: Sized, **fields: object,
) -> dict:
    """`extra=` payload describing one list transition."""
    extra = {
        "operation": operation,
        "site_count": len(after),
        "delta": len(after) - len(before),
    }
    extra.update({k: v for k, v in fields.items() if v is not None})
    return extra


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the package handler on the root logger."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s: %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return handler
