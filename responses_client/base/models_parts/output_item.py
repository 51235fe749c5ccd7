"""
Output items of a finalized response.

``OutputItem`` is a tagged union discriminated by ``type``:

* ``message``   -> :class:`MessageOutput`
* ``reasoning`` -> :class:`ReasoningOutput`
* anything else -> :class:`UnknownOutputItem` (forward compatibility)

Consumers dispatch with ``isinstance`` and must keep a branch for
``UnknownOutputItem``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Mapping, Optional, Sequence, Tuple, Union

from .content_part import ContentPart, parse_content_part
from .summary_part import SummaryPart, parse_summary_part

Role = Literal["system", "user", "assistant"]
ROLES: Tuple[str, ...] = ("system", "user", "assistant")


@dataclass(frozen=True)
class MessageOutput:
    """A message produced by the model.

    Attributes:
        id: Unique identifier of the item within its response.
        role: Author role; ``assistant`` for model output.
        content: Ordered content parts.
        status: Optional item status reported by the server.
    """

    id: str
    role: Role = "assistant"
    content: Tuple[ContentPart, ...] = ()
    status: Optional[str] = None
    type: Literal["message"] = "message"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type,
            "id": self.id,
            "role": self.role,
            "content": [p.to_dict() for p in self.content],
        }
        if self.status is not None:
            data["status"] = self.status
        return data


@dataclass(frozen=True)
class ReasoningOutput:
    """A reasoning trace item.

    ``encrypted_content`` is the opaque token that carries reasoning state
    into a follow-up request (see ``reasoning_continuation``).
    """

    id: str
    encrypted_content: Optional[str] = None
    summary: Tuple[SummaryPart, ...] = ()
    status: Optional[str] = None
    type: Literal["reasoning"] = "reasoning"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": self.type,
            "id": self.id,
            "summary": [p.to_dict() for p in self.summary],
        }
        if self.encrypted_content is not None:
            data["encrypted_content"] = self.encrypted_content
        if self.status is not None:
            data["status"] = self.status
        return data


@dataclass(frozen=True)
class UnknownOutputItem:
    """Fallback for output item types this client does not model."""

    type: str
    id: Optional[str] = None
    raw: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.raw)


OutputItem = Union[MessageOutput, ReasoningOutput, UnknownOutputItem]


def _parts(data: Mapping[str, Any], name: str) -> Sequence[Any]:
    value = data.get(name) or ()
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{name} must be a list, got {type(value).__name__}")
    return value


def parse_output_item(data: Mapping[str, Any]) -> OutputItem:
    """Decode one wire output item.

    Raises:
        ValueError: when ``data`` is not an object, a known variant lacks its
            id, carries an unknown role, or has a non-list part sequence.
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"output item must be an object, got {type(data).__name__}")
    item_type = data.get("type")
    item_id = data.get("id")
    if item_type == "message":
        if not isinstance(item_id, str):
            raise ValueError("message output item requires a string id")
        role = data.get("role") or "assistant"
        if role not in ROLES:
            raise ValueError(f"unknown message role: {role!r}")
        return MessageOutput(
            id=item_id,
            role=role,
            content=tuple(parse_content_part(p) for p in _parts(data, "content")),
            status=data.get("status"),
        )
    if item_type == "reasoning":
        if not isinstance(item_id, str):
            raise ValueError("reasoning output item requires a string id")
        return ReasoningOutput(
            id=item_id,
            encrypted_content=data.get("encrypted_content"),
            summary=tuple(parse_summary_part(p) for p in _parts(data, "summary")),
            status=data.get("status"),
        )
    return UnknownOutputItem(
        type=str(item_type),
        id=item_id if isinstance(item_id, str) else None,
        raw=dict(data),
    )


__all__ = [
    "OutputItem",
    "MessageOutput",
    "ReasoningOutput",
    "UnknownOutputItem",
    "Role",
    "parse_output_item",
]
