"""Base structured logging utilities for the responses client.

Rationale:
- Central place to configure consistent JSON (or plain) logging.
- Avoid sprinkling ad-hoc logger setup across the stream and transport code.

``normalized_log_event`` wraps ``log_event`` and injects the canonical
structured keys shared by every stream event: ``structured`` (bool),
``phase`` (str), ``attempt`` (int|None), ``error_code`` (str|None),
``emitted`` (bool|None) and ``tokens`` (mapping|None).
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Any, Dict, Mapping, Optional

from .log_support import JsonFormatter, LogContext

BASE_LOGGER_NAME = "responses_client"
LOG_LEVEL_ENV = "RESPONSES_LOG_LEVEL"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

_BASE_LOGGER_ATTR = "_responses_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_responses_console_handler"
_FILE_HANDLER_ATTR = "_responses_file_handler"


def _parse_level(value: str | None, default: int = logging.INFO) -> int:
    """Parse a logging level name into an integer constant.

    Accepts common names (DEBUG, INFO, WARNING, ERROR, CRITICAL) case-insensitively.
    Falls back to ``default`` on unknown values.
    """
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize and return the shared ``responses_client`` logger."""
    logger = logging.getLogger(BASE_LOGGER_NAME)
    desired_level = _parse_level(os.getenv(LOG_LEVEL_ENV), default=level)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        if logger.level != desired_level:
            logger.setLevel(desired_level)
        for existing in list(logger.handlers):
            if not getattr(existing, _CONSOLE_HANDLER_ATTR, False):
                continue
            stream_obj = getattr(existing, "stream", None)
            if stream_obj is None or getattr(stream_obj, "closed", False) or stream_obj is not sys.stderr:
                # pytest swaps sys.stderr per test; rebind to the live stream.
                logger.removeHandler(existing)
                replacement = logging.StreamHandler(sys.stderr)
                replacement.setLevel(desired_level)
                replacement.setFormatter(_formatter(json_mode))
                setattr(replacement, _CONSOLE_HANDLER_ATTR, True)
                logger.addHandler(replacement)
                continue
            existing.setLevel(desired_level)
        return logger

    logger.setLevel(desired_level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(desired_level)
    handler.setFormatter(_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.handlers[:] = [handler]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.INFO) -> logging.Logger:
    """Return a logger under the shared ``responses_client`` hierarchy.

    Child loggers carry no handlers of their own and propagate to the base
    logger, so every line is emitted exactly once.
    """
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    logger = logging.getLogger(name)
    for handler in list(logger.handlers):
        if getattr(handler, _CONSOLE_HANDLER_ATTR, False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(
    *,
    level: int | str | None = None,
    file_path: Optional[str] = None,
    json_mode: bool = True,
) -> logging.Logger:
    """Reconfigure the shared logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Desired logging level (number or name). ``None`` keeps the current level.
    file_path: Optional[str]
        When provided, a rotating file handler writing to ``file_path`` is
        attached (or reused). When ``None``, managed file handlers are removed.
    json_mode: bool
        JSON formatter (default) or plain text for added handlers.
    """
    logger = _ensure_base_logger(json_mode=json_mode, level=logging.INFO)
    if level is not None:
        logger.setLevel(_parse_level(level, default=logger.level) if isinstance(level, str) else level)
        for h in logger.handlers:
            h.setLevel(logger.level)

    managed = [h for h in logger.handlers if getattr(h, _FILE_HANDLER_ATTR, False)]
    abs_path = os.path.abspath(os.path.expanduser(file_path)) if file_path else None
    for h in managed:
        if abs_path is None or getattr(h, "baseFilename", None) != abs_path:
            logger.removeHandler(h)
            with contextlib.suppress(OSError):
                h.close()
        else:
            h.setFormatter(_formatter(json_mode))
            h.setLevel(logger.level)
            return logger
    if abs_path is None:
        return logger

    os.makedirs(os.path.dirname(abs_path), exist_ok=True)
    fh = RotatingFileHandler(abs_path, maxBytes=10 * 1024 * 1024, backupCount=5, encoding="utf-8")
    setattr(fh, _FILE_HANDLER_ATTR, True)
    fh.setLevel(logger.level)
    fh.setFormatter(_formatter(json_mode))
    logger.addHandler(fh)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    level: int = logging.INFO,
    keep_none: bool = False,
    **fields: Any,
) -> None:
    """Emit a structured log event as a single JSON line.

    Keys whose values are ``None`` are dropped unless ``keep_none`` is set,
    which ``normalized_log_event`` uses to guarantee its schema keys.
    """
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    if keep_none:
        payload.update(fields)
    else:
        payload.update({k: v for k, v in fields.items() if v is not None})
    logger.log(level, json.dumps(payload, ensure_ascii=False, default=repr))


REQUIRED_NORMALIZED_KEYS = (
    "structured",
    "phase",
    "attempt",
    "error_code",
    "emitted",
    "tokens",
)


def _coerce_tokens(tokens: Any) -> Any:
    """Coerce token usage info into a JSON-friendly mapping (or ``None``)."""
    if tokens is None:
        return None
    if isinstance(tokens, Mapping):
        return dict(tokens.items())
    return {"value": repr(tokens)}


def normalized_log_event(  # noqa: PLR0913
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    attempt: int | None = None,
    error_code: str | None = None,
    emitted: bool | None = None,
    tokens: Any = None,
    structured: bool = True,
    level: int = logging.INFO,
    **extra_fields: Any,
) -> None:
    """Emit a structured log event carrying the normalized key set.

    ``error_code`` is omitted when ``None``; every other normalized key is
    present even when its value is unknown. ``extra_fields`` never overwrite
    normalized values.
    """
    base_fields: Dict[str, Any] = {
        "structured": structured,
        "phase": phase,
        "attempt": attempt,
        "emitted": emitted,
        "tokens": _coerce_tokens(tokens),
    }
    if error_code is not None:
        base_fields["error_code"] = error_code
    for k, v in extra_fields.items():
        if v is None or k in base_fields:
            continue
        base_fields[k] = v
    log_event(logger, event, ctx, level=level, keep_none=True, **base_fields)


__all__ = [
    "LogContext",
    "BASE_LOGGER_NAME",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    "REQUIRED_NORMALIZED_KEYS",
]
