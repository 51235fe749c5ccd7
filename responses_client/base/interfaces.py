"""
Transport interfaces for the client core.

Re-exports the Protocols under ``responses_client.base.interfaces_parts`` to
keep a stable import path.
"""

from __future__ import annotations

from .interfaces_parts import ResponsesTransport

__all__ = ["ResponsesTransport"]
