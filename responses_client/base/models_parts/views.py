"""Read-only projections over a finalized response."""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterator, Optional

from .content_part import OutputText
from .output_item import MessageOutput

if TYPE_CHECKING:  # pragma: no cover
    from .response import Response


def _message_texts(response: "Response") -> Iterator[str]:
    for item in response.output:
        if not isinstance(item, MessageOutput):
            continue
        for part in item.content:
            if isinstance(part, OutputText):
                yield part.text


def first_message_text(response: "Response") -> Optional[str]:
    """Text of the first text part of the first message item, or ``None``."""
    for item in response.output:
        if isinstance(item, MessageOutput):
            for part in item.content:
                if isinstance(part, OutputText):
                    return part.text
            return None
    return None


def output_text(response: "Response") -> Optional[str]:
    """Concatenation of every message text part, or ``None`` when there are none."""
    texts = list(_message_texts(response))
    if not texts:
        return None
    return "".join(texts)


__all__ = ["first_message_text", "output_text"]
