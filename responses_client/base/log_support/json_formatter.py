"""JSON logging formatter used by the client logging setup.

:class:`JsonFormatter` serializes standard logging fields, hoists keys from
JSON-encoded messages to the top level, and merges non-internal extra
attributes from the ``LogRecord``.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone

ISO = "%Y-%m-%dT%H:%M:%S.%fZ"

_RECORD_INTERNALS = frozenset(
    {
        "msg",
        "args",
        "levelname",
        "levelno",
        "name",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
    }
)


class JsonFormatter(logging.Formatter):
    """Lightweight JSON formatter for structured logs."""

    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": datetime.now(timezone.utc).strftime(ISO),
            "level": record.levelname,
            "logger": record.name,
        }
        msg_text = record.getMessage()
        base["msg"] = msg_text
        # Structured events are logged as JSON strings; hoist their keys so the
        # emitted line is not double-encoded. ``msg`` keeps the raw string.
        try:
            parsed = json.loads(msg_text)
        except ValueError:
            parsed = None
        if isinstance(parsed, dict):
            for k, v in parsed.items():
                base.setdefault(k, v)
        for k, v in record.__dict__.items():
            if k.startswith("_") or k in _RECORD_INTERNALS:
                continue
            if k not in base:
                base[k] = v
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False, default=repr)


__all__ = ["JsonFormatter", "ISO"]
