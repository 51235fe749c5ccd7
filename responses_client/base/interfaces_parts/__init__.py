"""Protocols split into single-class modules."""

from .responses_transport import ResponsesTransport

__all__ = ["ResponsesTransport"]
