"""Request DTOs and the validating request factory."""

from .request import (
    InputItem,
    InputSummaryText,
    InputText,
    MessageInput,
    ReasoningConfig,
    ReasoningInput,
    ReasoningText,
    ResponseRequest,
    reasoning_continuation,
)
from .request_factory import build_request

__all__ = [
    "InputItem",
    "InputSummaryText",
    "InputText",
    "MessageInput",
    "ReasoningConfig",
    "ReasoningInput",
    "ReasoningText",
    "ResponseRequest",
    "reasoning_continuation",
    "build_request",
]
