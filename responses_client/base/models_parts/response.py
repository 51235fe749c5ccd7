"""
Finalized response entity shared by the blocking and streaming paths.

``Response.from_dict`` is the single wire-to-model mapping: the blocking
transport result and every snapshot carried by a stream event go through it,
so both delivery modes converge on the same value.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from .output_item import OutputItem, parse_output_item
from .usage import Usage
from .views import first_message_text, output_text


class ResponseStatus(str, Enum):
    """Lifecycle status of a response as reported by the server."""

    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    INCOMPLETE = "incomplete"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class Response:
    """One response produced by the remote API.

    Output items are held in a tuple; a completed response is immutable.
    """

    id: str
    status: ResponseStatus
    output: Tuple[OutputItem, ...] = ()
    model: Optional[str] = None
    created_at: Optional[int] = None
    usage: Optional[Usage] = None
    metadata: Optional[Mapping[str, Any]] = None
    error: Optional[Mapping[str, Any]] = None
    incomplete_details: Optional[Mapping[str, Any]] = None
    object: str = field(default="response")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Response":
        """Build a ``Response`` from its wire mapping.

        Raises:
            ValueError: when the mapping lacks an id, carries an unknown status,
                contains an undecodable output item, or repeats an output item id.
        """
        if not isinstance(data, Mapping):
            raise ValueError(f"response must be an object, got {type(data).__name__}")
        response_id = data.get("id")
        if not isinstance(response_id, str) or not response_id:
            raise ValueError("response requires a non-empty string id")
        try:
            status = ResponseStatus(data.get("status") or ResponseStatus.IN_PROGRESS.value)
        except ValueError as exc:
            raise ValueError(f"unknown response status: {data.get('status')!r}") from exc
        output = data.get("output") or ()
        if not isinstance(output, (list, tuple)):
            raise ValueError("response output must be a list")
        items = tuple(parse_output_item(item) for item in output)
        ids = [i.id for i in items if i.id is not None]
        if len(ids) != len(set(ids)):
            dupes = sorted({i for i in ids if ids.count(i) > 1})
            raise ValueError(f"duplicate output item id: {', '.join(dupes)}")
        usage = data.get("usage")
        created_at = data.get("created_at")
        return cls(
            id=response_id,
            status=status,
            output=items,
            model=data.get("model") if isinstance(data.get("model"), str) else None,
            created_at=created_at if isinstance(created_at, int) and not isinstance(created_at, bool) else None,
            usage=Usage.from_dict(usage) if usage is not None else None,
            metadata=data.get("metadata") if isinstance(data.get("metadata"), Mapping) else None,
            error=data.get("error") if isinstance(data.get("error"), Mapping) else None,
            incomplete_details=(
                data.get("incomplete_details") if isinstance(data.get("incomplete_details"), Mapping) else None
            ),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "object": self.object,
            "status": self.status.value,
            "model": self.model,
            "created_at": self.created_at,
            "output": [item.to_dict() for item in self.output],
        }
        if self.usage is not None:
            data["usage"] = self.usage.to_dict()
        if self.metadata is not None:
            data["metadata"] = dict(self.metadata)
        if self.error is not None:
            data["error"] = dict(self.error)
        if self.incomplete_details is not None:
            data["incomplete_details"] = dict(self.incomplete_details)
        return data

    def item(self, item_id: str) -> Optional[OutputItem]:
        """Return the output item with ``item_id`` or ``None``."""
        return next((i for i in self.output if getattr(i, "id", None) == item_id), None)

    @property
    def first_message_text(self) -> Optional[str]:
        return first_message_text(self)

    @property
    def output_text(self) -> Optional[str]:
        return output_text(self)


__all__ = ["Response", "ResponseStatus"]
