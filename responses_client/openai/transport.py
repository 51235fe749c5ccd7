"""httpx-backed ``ResponsesTransport``.

``submit`` performs ``POST {base_url}/responses`` and returns the decoded
body. ``submit_streaming`` opens the same request with ``stream=True`` and
returns an :class:`SseRecordStream`; closing that stream (or exhausting it)
closes the HTTP response and returns the connection to the pool.

Failure modes:
    - HTTP status >= 400 raises ``httpx.HTTPStatusError`` after reading the
      body, so the remote error payload is available on ``exc.response``.
    - Network errors and timeouts propagate as ``httpx`` exceptions.
    Classification into the error taxonomy happens in the client.
"""
from __future__ import annotations

import threading
from typing import Any, Dict, Iterator, Mapping, Optional

import httpx

from ..base.http.client import get_httpx_client
from .sse import iter_sse_records

RESPONSES_PATH = "/responses"


class SseRecordStream:
    """Closeable iterator of decoded records over a streaming HTTP response."""

    def __init__(self, response: httpx.Response) -> None:
        self._response = response
        self._records = iter_sse_records(response.iter_lines())
        self._lock = threading.Lock()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> "SseRecordStream":
        return self

    def __next__(self) -> Dict[str, Any]:
        if self._closed:
            raise StopIteration
        try:
            return next(self._records)
        except StopIteration:
            self.close()
            raise

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._response.close()


class HttpxResponsesTransport:
    """Transport speaking the responses wire protocol over httpx.

    Parameters:
        base_url: API root, e.g. ``https://api.openai.com/v1``.
        api_key: Sent as a bearer token when set.
        client / stream_client: Optional preconfigured ``httpx.Client``
            instances (tests pass clients built on ``httpx.MockTransport``).
            Pooled clients from :func:`get_httpx_client` are used otherwise.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: Optional[str] = None,
        client: Optional[httpx.Client] = None,
        stream_client: Optional[httpx.Client] = None,
        extra_headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.url = base_url.rstrip("/") + RESPONSES_PATH
        self._client = client
        self._stream_client = stream_client or client
        headers: Dict[str, str] = {"Content-Type": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        headers.update(extra_headers or {})
        self._headers = headers

    def _client_for(self, purpose: str) -> httpx.Client:
        preset = self._stream_client if purpose == "stream" else self._client
        return preset or get_httpx_client(None, purpose)

    def submit(self, payload: Mapping[str, Any]) -> Mapping[str, Any]:
        response = self._client_for("blocking").post(self.url, json=dict(payload), headers=self._headers)
        response.raise_for_status()
        return response.json()

    def submit_streaming(self, payload: Mapping[str, Any]) -> Iterator[Mapping[str, Any]]:
        client = self._client_for("stream")
        headers = dict(self._headers, Accept="text/event-stream")
        request = client.build_request("POST", self.url, json=dict(payload), headers=headers)
        response = client.send(request, stream=True)
        if response.is_error:
            try:
                response.read()
            finally:
                response.close()
            response.raise_for_status()
        return SseRecordStream(response)


__all__ = ["HttpxResponsesTransport", "SseRecordStream", "RESPONSES_PATH"]
