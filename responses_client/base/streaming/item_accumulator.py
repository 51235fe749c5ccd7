"""
Per-item accumulation state owned by one aggregator.

Each accumulator keeps the item as first announced plus text buffers for the
``content`` and ``summary`` channels, keyed by part index. ``build`` folds the
buffers back into a finalized output item.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from ..events_parts.stream_event import Channel
from ..models_parts.content_part import ContentPart, OutputText
from ..models_parts.output_item import MessageOutput, OutputItem, ReasoningOutput
from ..models_parts.summary_part import SummaryPart, SummaryText


@dataclass
class ItemAccumulator:
    item: OutputItem
    output_index: Optional[int] = None
    order: int = 0
    content: Dict[int, List[str]] = field(default_factory=dict)
    summary: Dict[int, List[str]] = field(default_factory=dict)
    content_parts: Dict[int, ContentPart] = field(default_factory=dict)
    summary_parts: Dict[int, SummaryPart] = field(default_factory=dict)

    def _buffers(self, channel: Channel) -> Dict[int, List[str]]:
        return self.summary if channel == "summary" else self.content

    def open(self, channel: Channel, index: int, part: Optional[Union[ContentPart, SummaryPart]] = None) -> None:
        """Open the buffer for ``(channel, index)``; an existing buffer is kept."""
        self._buffers(channel).setdefault(index, [])
        if part is None:
            return
        if channel == "summary":
            self.summary_parts[index] = part  # type: ignore[assignment]
        else:
            self.content_parts[index] = part  # type: ignore[assignment]

    def append(self, channel: Channel, index: int, fragment: str) -> None:
        self._buffers(channel).setdefault(index, []).append(fragment)

    def text(self, channel: Channel, index: int = 0) -> Optional[str]:
        """Accumulated text, or ``None`` when the buffer was never opened."""
        buf = self._buffers(channel).get(index)
        return None if buf is None else "".join(buf)

    @property
    def item_id(self) -> Optional[str]:
        return getattr(self.item, "id", None)

    def sort_key(self) -> tuple:
        # Items without an output index keep registration order after indexed ones.
        return (self.output_index is None, self.output_index or 0, self.order)

    def build(self) -> OutputItem:
        """Return the item with accumulated text folded into its parts."""
        if isinstance(self.item, MessageOutput):
            return dataclasses.replace(self.item, content=self._build_content())
        if isinstance(self.item, ReasoningOutput):
            return dataclasses.replace(self.item, summary=self._build_summary())
        return self.item

    def _build_content(self) -> tuple:
        assert isinstance(self.item, MessageOutput)  # nosec B101
        parts: Dict[int, ContentPart] = dict(enumerate(self.item.content))
        parts.update(self.content_parts)
        for index, fragments in self.content.items():
            base = parts.get(index)
            annotations = base.annotations if isinstance(base, OutputText) else ()
            parts[index] = OutputText(text="".join(fragments), annotations=annotations)
        return tuple(parts[i] for i in sorted(parts))

    def _build_summary(self) -> tuple:
        assert isinstance(self.item, ReasoningOutput)  # nosec B101
        parts: Dict[int, SummaryPart] = dict(enumerate(self.item.summary))
        parts.update(self.summary_parts)
        for index, fragments in self.summary.items():
            parts[index] = SummaryText(text="".join(fragments))
        return tuple(parts[i] for i in sorted(parts))


__all__ = ["ItemAccumulator"]
