"""Structured JSON logging configuration.

All log output goes to stderr in JSON format so CI log viewers and
downstream collectors can parse it line by line.

Format per line:
    {"ts": "2025-03-01T12:00:00Z", "level": "INFO", "logger": "coverage_action.stages.base", "msg": "...", ...}
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone


class JSONFormatter(logging.Formatter):
    """Emit each log record as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }

        # Include stage name if attached to the record via extra={}
        if hasattr(record, "stage"):
            payload["stage"] = record.stage

        if record.exc_info and record.exc_info[0] is not None:
            payload["exc"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str)


def setup_logging(stream=None) -> None:
    """Configure root logger with JSON output.

    Defaults to stderr so stdout stays free for workflow commands.
    The log level is controlled by the ``LOG_LEVEL`` env var
    (default ``INFO``).
    """
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(JSONFormatter())

    root = logging.getLogger()
    root.setLevel(level)

    root.handlers.clear()
    root.addHandler(handler)
