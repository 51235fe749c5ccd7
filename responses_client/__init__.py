"""responses_client package

Client for a generative "responses" API with blocking and streaming modes.
Streamed events are decoded, validated and assembled into the same
``Response`` value a blocking call returns.

Public API (re-exported):
    - Version: ``__version__``
    - Client: :class:`OpenAIResponsesClient`
    - Requests: :func:`build_request`, :func:`reasoning_continuation`
    - Results: :class:`Response` and the output item types
    - Streaming: :class:`ResponseStream`, :class:`ResponseStreamAggregator`
    - Errors: :class:`ResponsesError` and its subclasses, :class:`ErrorCode`,
      :class:`CancelledError`
"""

from .base.cancellation import CancellationToken, CancelledError
from .base.dto import (
    MessageInput,
    ReasoningConfig,
    ReasoningInput,
    ResponseRequest,
    build_request,
    reasoning_continuation,
)
from .base.errors import (
    ErrorCode,
    IncompleteStreamError,
    InvalidRequestError,
    MalformedEventError,
    ResponsesError,
    SequenceViolationError,
    TransportFailureError,
)
from .base.models import (
    MessageOutput,
    OutputText,
    ReasoningOutput,
    Response,
    ResponseStatus,
    SummaryText,
    UnknownOutputItem,
    Usage,
)
from .base.streaming import ResponseStream, ResponseStreamAggregator, StreamOutcome, StreamUpdate
from .openai import HttpxResponsesTransport, OpenAIResponsesClient

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "OpenAIResponsesClient",
    "HttpxResponsesTransport",
    "CancellationToken",
    "CancelledError",
    "MessageInput",
    "ReasoningConfig",
    "ReasoningInput",
    "ResponseRequest",
    "build_request",
    "reasoning_continuation",
    "ErrorCode",
    "IncompleteStreamError",
    "InvalidRequestError",
    "MalformedEventError",
    "ResponsesError",
    "SequenceViolationError",
    "TransportFailureError",
    "MessageOutput",
    "OutputText",
    "ReasoningOutput",
    "Response",
    "ResponseStatus",
    "SummaryText",
    "UnknownOutputItem",
    "Usage",
    "ResponseStream",
    "ResponseStreamAggregator",
    "StreamOutcome",
    "StreamUpdate",
]
