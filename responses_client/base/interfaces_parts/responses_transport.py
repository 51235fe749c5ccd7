"""ResponsesTransport Protocol (single-class module).

The seam between the client core and the network. The core never imports a
concrete transport; anything with these two methods can be plugged in.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Protocol, runtime_checkable


@runtime_checkable
class ResponsesTransport(Protocol):
    """Performs blocking and streaming requests against the responses API.

    ``submit`` returns the parsed response body. ``submit_streaming`` returns
    a lazily produced iterator of already-decoded event records; it should
    also expose ``close()`` so that abandoning the stream releases the
    underlying connection. Both raise on transport-level failure.
    """

    def submit(self, payload: Mapping[str, Any]) -> Mapping[str, Any]:  # pragma: no cover - interface
        """Send ``payload`` and return the complete response mapping."""
        ...

    def submit_streaming(self, payload: Mapping[str, Any]) -> Iterator[Mapping[str, Any]]:  # pragma: no cover - interface
        """Send ``payload`` and return an iterator over raw event records."""
        ...
