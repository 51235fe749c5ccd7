"""
Pydantic DTOs for outbound response requests.

Purpose
-------
Define the request envelope and its input items with validation, so that
structurally invalid requests are rejected locally before any transport call.

Design
------
- ``InputItem`` is a tagged union discriminated by ``type``
  (``message`` | ``reasoning``).
- ``ResponseRequest`` is frozen once built. ``store`` is a computed field
  pinned to ``False``: the protocol is stateless, a caller value is ignored
  and not even ``model_copy(update=...)`` can change the wire value.
- Validation failures surface as ``pydantic.ValidationError``; the
  ``build_request`` factory converts them to ``InvalidRequestError``.
"""

from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator, model_validator

from ...config.defaults import MIN_OUTPUT_TOKENS
from ..models_parts.output_item import ReasoningOutput
from ..models_parts.summary_part import SummaryText

Role = Literal["system", "user", "assistant"]

TOKEN_CAP_REASON = "token cap below minimum"
EMPTY_INPUT_REASON = "empty input"
REASONING_CONTENT_REASON = "reasoning continuation content must be empty"


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class InputText(_FrozenModel):
    """Text part of an input message."""

    type: Literal["input_text"] = "input_text"
    text: str


class MessageInput(_FrozenModel):
    """A conversation message supplied as input.

    ``content`` is either a plain string or a non-empty list of text parts.
    """

    type: Literal["message"] = "message"
    role: Role
    content: Union[str, List[InputText]]

    @model_validator(mode="after")
    def _validate_content(self) -> "MessageInput":
        if isinstance(self.content, list) and not self.content:
            raise ValueError("message content parts must be a non-empty list")
        return self


class ReasoningText(_FrozenModel):
    type: Literal["reasoning_text"] = "reasoning_text"
    text: str


class InputSummaryText(_FrozenModel):
    type: Literal["summary_text"] = "summary_text"
    text: str


class ReasoningInput(_FrozenModel):
    """Reasoning continuation carried from a previous response.

    Only ``summary`` and ``encrypted_content`` carry state across requests;
    ``content`` must be empty.
    """

    type: Literal["reasoning"] = "reasoning"
    id: Optional[str] = None
    content: List[ReasoningText] = Field(default_factory=list)
    summary: List[InputSummaryText] = Field(default_factory=list)
    encrypted_content: Optional[str] = None

    @model_validator(mode="after")
    def _validate_empty_content(self) -> "ReasoningInput":
        if self.content:
            raise ValueError(REASONING_CONTENT_REASON)
        return self


InputItem = Annotated[Union[MessageInput, ReasoningInput], Field(discriminator="type")]


class ReasoningConfig(_FrozenModel):
    """Reasoning options: effort level and summary mode."""

    effort: Optional[Literal["low", "medium", "high"]] = None
    summary: Optional[Literal["auto", "concise", "detailed"]] = None


class ResponseRequest(_FrozenModel):
    """Request envelope for the responses endpoint.

    Parameters:
        model: Target model identifier (non-empty).
        input: Ordered input items (non-empty).
        reasoning: Optional reasoning configuration.
        include: Optional opaque feature flags (e.g. ``reasoning.encrypted_content``).
        temperature: If provided, within [0.0, 2.0].
        max_output_tokens: If provided, at least ``MIN_OUTPUT_TOKENS``.
        instructions: Optional system-level instructions.
        stream: Whether the server should stream events.
        store: Always ``False``.

    Raises:
        ValidationError: On any violated rule.
    """

    model: str = Field(..., min_length=1)
    input: List[InputItem]
    reasoning: Optional[ReasoningConfig] = None
    include: Optional[List[str]] = None
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_output_tokens: Optional[int] = None
    instructions: Optional[str] = None
    stream: bool = False

    @field_validator("input")
    @classmethod
    def _validate_input(cls, value: List[Any]) -> List[Any]:
        if not value:
            raise ValueError(EMPTY_INPUT_REASON)
        return value

    @field_validator("max_output_tokens")
    @classmethod
    def _validate_token_cap(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < MIN_OUTPUT_TOKENS:
            raise ValueError(TOKEN_CAP_REASON)
        return value

    @computed_field  # type: ignore[prop-decorator]
    @property
    def store(self) -> bool:
        return False

    def to_payload(self) -> Dict[str, Any]:
        """Wire body for the request; unset optional fields are omitted."""
        payload = self.model_dump(mode="json", exclude_none=True)
        payload["store"] = False
        return payload

    def with_stream(self, stream: bool) -> "ResponseRequest":
        """Return a copy with the ``stream`` flag set."""
        return self.model_copy(update={"stream": stream})


def reasoning_continuation(item: ReasoningOutput) -> ReasoningInput:
    """Build the input item that carries ``item``'s reasoning into a new request."""
    return ReasoningInput(
        id=item.id,
        summary=[InputSummaryText(text=p.text) for p in item.summary if isinstance(p, SummaryText)],
        encrypted_content=item.encrypted_content,
    )


__all__ = [
    "Role",
    "InputText",
    "MessageInput",
    "ReasoningText",
    "InputSummaryText",
    "ReasoningInput",
    "InputItem",
    "ReasoningConfig",
    "ResponseRequest",
    "reasoning_continuation",
    "TOKEN_CAP_REASON",
    "EMPTY_INPUT_REASON",
    "REASONING_CONTENT_REASON",
]
