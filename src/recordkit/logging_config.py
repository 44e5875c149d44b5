"""Logging setup for the recordkit command line."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# attributes every LogRecord carries; anything else arrived through ``extra=``
_STANDARD_ATTRIBUTES = frozenset(logging.LogRecord("", 0, "", 0, "", (), None).__dict__) | {"message", "asctime"}


def _json_formatter(record: logging.LogRecord) -> str:
    """Render a log record as a JSON object, including ``extra`` attributes."""
    payload: dict[str, Any] = {
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    payload.update({k: v for k, v in record.__dict__.items() if k not in _STANDARD_ATTRIBUTES})
    if record.exc_info:
        payload["exc_info"] = logging.Formatter().formatException(record.exc_info)
    return json.dumps(payload, default=repr)


class JsonFormatter(logging.Formatter):
    """Format records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return _json_formatter(record)


def configure_logging(level: str = "WARNING", json_logs: bool = False) -> logging.Logger:
    """
    Attach a stderr handler to the ``recordkit`` logger.

    Library modules only create loggers; the CLI calls this with values from
    ``Settings``. Calling it again replaces the previous handler.

    Args:
        level: Logging level name, case-insensitive.
        json_logs: Use ``JsonFormatter`` instead of the console format.

    Returns:
        The configured ``recordkit`` logger.

    """
    logger = logging.getLogger("recordkit")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter() if json_logs else logging.Formatter(_CONSOLE_FORMAT, _DATE_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level.upper())
    logger.propagate = False
    return logger


__all__ = ["JsonFormatter", "configure_logging"]
