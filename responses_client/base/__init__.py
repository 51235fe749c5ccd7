"""
Client core: models, events, request DTOs, stream assembly, errors.

Nothing in this package imports a concrete transport; transports plug in
through :class:`ResponsesTransport`.
"""

from .cancellation import CancellationToken, CancelledError
from .dto import (
    InputText,
    MessageInput,
    ReasoningConfig,
    ReasoningInput,
    ResponseRequest,
    build_request,
    reasoning_continuation,
)
from .errors import (
    ErrorCode,
    IncompleteStreamError,
    InvalidRequestError,
    MalformedEventError,
    ResponsesError,
    SequenceViolationError,
    TransportFailureError,
    classify_exception,
    to_responses_error,
)
from .events import StreamEvent, decode_event
from .interfaces import ResponsesTransport
from .models import (
    MessageOutput,
    OutputText,
    ReasoningOutput,
    Response,
    ResponseStatus,
    SummaryText,
    UnknownOutputItem,
    Usage,
    first_message_text,
    output_text,
    validate_usage,
)
from .streaming import (
    ResponseStream,
    ResponseStreamAggregator,
    StreamOutcome,
    StreamStatus,
    StreamUpdate,
)
from .timeouts import TimeoutConfig, get_timeout_config, operation_timeout

__all__ = [
    "CancellationToken",
    "CancelledError",
    "InputText",
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
    "classify_exception",
    "to_responses_error",
    "StreamEvent",
    "decode_event",
    "ResponsesTransport",
    "MessageOutput",
    "OutputText",
    "ReasoningOutput",
    "Response",
    "ResponseStatus",
    "SummaryText",
    "UnknownOutputItem",
    "Usage",
    "first_message_text",
    "output_text",
    "validate_usage",
    "ResponseStream",
    "ResponseStreamAggregator",
    "StreamOutcome",
    "StreamStatus",
    "StreamUpdate",
    "TimeoutConfig",
    "get_timeout_config",
    "operation_timeout",
]
