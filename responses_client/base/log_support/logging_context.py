"""Structured logging context object for streams and requests.

Carries the fields shared by every log event of one request (model, request
and response identifiers, stream mode) plus an ``extra`` mapping.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional


@dataclass
class LogContext:
    """Structured context for client logging events."""

    model: Optional[str] = None
    mode: Optional[str] = None
    request_id: Optional[str] = None
    response_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        extra = data.pop("extra", {}) or {}
        data.update({k: v for k, v in extra.items() if v is not None})
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["LogContext"]
