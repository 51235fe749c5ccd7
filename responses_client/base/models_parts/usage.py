"""
Token usage statistics and their consistency check.

``validate_usage`` enforces the accounting invariant: when input and output
counts are both present and output is positive, ``total`` must equal their
sum. Negative counts are rejected as well.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple


def _opt_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


@dataclass(frozen=True)
class Usage:
    """Token accounting reported with a response.

    Attributes:
        input_tokens: Prompt tokens billed.
        output_tokens: Generated tokens billed (reasoning included).
        total_tokens: Sum reported by the server.
        cached_tokens: ``input_tokens_details.cached_tokens`` when present.
        reasoning_tokens: ``output_tokens_details.reasoning_tokens`` when present.
    """

    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    cached_tokens: Optional[int] = None
    reasoning_tokens: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Usage":
        if not isinstance(data, Mapping):
            raise ValueError(f"usage must be an object, got {type(data).__name__}")
        input_details = data.get("input_tokens_details") or {}
        output_details = data.get("output_tokens_details") or {}
        return cls(
            input_tokens=_opt_int(data.get("input_tokens")),
            output_tokens=_opt_int(data.get("output_tokens")),
            total_tokens=_opt_int(data.get("total_tokens")),
            cached_tokens=_opt_int(input_details.get("cached_tokens")) if isinstance(input_details, Mapping) else None,
            reasoning_tokens=(
                _opt_int(output_details.get("reasoning_tokens")) if isinstance(output_details, Mapping) else None
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "input_tokens": self.input_tokens,
            "output_tokens": self.output_tokens,
            "total_tokens": self.total_tokens,
        }
        if self.cached_tokens is not None:
            data["input_tokens_details"] = {"cached_tokens": self.cached_tokens}
        if self.reasoning_tokens is not None:
            data["output_tokens_details"] = {"reasoning_tokens": self.reasoning_tokens}
        return data

    def as_metrics(self) -> Dict[str, Optional[int]]:
        """Flat mapping used for the ``tokens`` field of structured log lines."""
        return {
            "prompt": self.input_tokens,
            "completion": self.output_tokens,
            "total": self.total_tokens,
        }


def validate_usage(usage: Optional[Usage], raise_on_error: bool = False) -> Tuple[bool, Optional[str]]:
    """Check a ``Usage`` value for internal consistency.

    Returns ``(True, None)`` when consistent (``None`` usage is accepted),
    otherwise ``(False, reason)``. With ``raise_on_error`` a ``ValueError``
    carrying the reason is raised instead.
    """
    reason: Optional[str] = None
    if usage is not None:
        counts = {
            "input_tokens": usage.input_tokens,
            "output_tokens": usage.output_tokens,
            "total_tokens": usage.total_tokens,
            "cached_tokens": usage.cached_tokens,
            "reasoning_tokens": usage.reasoning_tokens,
        }
        negative = [k for k, v in counts.items() if v is not None and v < 0]
        if negative:
            reason = f"negative token count: {', '.join(negative)}"
        elif (
            usage.input_tokens is not None
            and usage.output_tokens is not None
            and usage.output_tokens > 0
        ):
            expected = usage.input_tokens + usage.output_tokens
            if usage.total_tokens != expected:
                reason = f"total_tokens {usage.total_tokens} != input_tokens + output_tokens ({expected})"
    if reason is not None and raise_on_error:
        raise ValueError(reason)
    return reason is None, reason


__all__ = ["Usage", "validate_usage"]
