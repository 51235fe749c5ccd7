"""
Message content parts of a finalized response.

``ContentPart`` is a tagged union discriminated by ``type``. Only text is
modelled today; any other part type decodes into ``UnknownContentPart`` so a
new server-side variant never breaks decoding.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Mapping, Tuple, Union

TEXT_PART_TYPES = ("output_text", "text")


@dataclass(frozen=True)
class OutputText:
    """Text content within a message output item.

    Attributes:
        text: The text content.
        annotations: Opaque annotation entries attached by the server.
    """

    text: str
    annotations: Tuple[Any, ...] = ()
    type: Literal["output_text"] = "output_text"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "text": self.text, "annotations": list(self.annotations)}


@dataclass(frozen=True)
class UnknownContentPart:
    """Fallback for content part types this client does not model."""

    type: str
    raw: Mapping[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.raw)


ContentPart = Union[OutputText, UnknownContentPart]


def parse_content_part(data: Mapping[str, Any]) -> ContentPart:
    """Decode one wire content part; unfamiliar types are preserved, not rejected.

    Raises:
        ValueError: when ``data`` is not an object or a text part carries
            non-list annotations.
    """
    if not isinstance(data, Mapping):
        raise ValueError(f"content part must be an object, got {type(data).__name__}")
    part_type = data.get("type")
    if part_type in TEXT_PART_TYPES and isinstance(data.get("text"), str):
        annotations = data.get("annotations") or ()
        if not isinstance(annotations, (list, tuple)):
            raise ValueError(f"annotations must be a list, got {type(annotations).__name__}")
        return OutputText(text=data["text"], annotations=tuple(annotations))
    return UnknownContentPart(type=str(part_type), raw=dict(data))


__all__ = [
    "ContentPart",
    "OutputText",
    "UnknownContentPart",
    "parse_content_part",
    "TEXT_PART_TYPES",
]
