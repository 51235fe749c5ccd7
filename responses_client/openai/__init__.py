"""Concrete client and httpx transport for the responses endpoint."""

from .client import OpenAIResponsesClient
from .sse import iter_sse_records
from .transport import HttpxResponsesTransport, SseRecordStream

__all__ = ["OpenAIResponsesClient", "HttpxResponsesTransport", "SseRecordStream", "iter_sse_records"]
