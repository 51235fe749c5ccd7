"""Reasoning summary parts (tagged union with an unknown fallback)."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Mapping, Union


@dataclass(frozen=True)
class SummaryText:
    """Plain text summary of a reasoning trace."""

    text: str
    type: Literal["summary_text"] = "summary_text"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class UnknownSummaryPart:
    type: str
    raw: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.raw)


SummaryPart = Union[SummaryText, UnknownSummaryPart]


def parse_summary_part(data: Mapping[str, Any]) -> SummaryPart:
    if not isinstance(data, Mapping):
        raise ValueError(f"summary part must be an object, got {type(data).__name__}")
    if data.get("type") == "summary_text" and isinstance(data.get("text"), str):
        return SummaryText(text=data["text"])
    return UnknownSummaryPart(type=str(data.get("type")), raw=dict(data))


__all__ = ["SummaryPart", "SummaryText", "UnknownSummaryPart", "parse_summary_part"]
