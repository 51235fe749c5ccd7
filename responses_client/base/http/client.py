"""Shared HTTP client pool.

Purpose:
    Provide a thread-safe pool of reusable ``httpx.Client`` instances so that
    transports do not allocate a connection pool per request. Timeouts derive
    from :func:`get_timeout_config`.

Timeout strategy:
    - ``connect`` uses the start timeout, ``read`` the stream idle timeout for
      the ``"stream"`` purpose and the HTTP timeout otherwise. Values are
      captured when a client is first created.

Lifecycle & cleanup:
    - Clients are cached by ``(base_url, purpose)``. Purposes keep distinct
      pools (e.g. "blocking" vs "stream").
    - All clients are closed at interpreter exit via ``atexit``; tests may call
      :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict, Optional, Tuple

import httpx

from ...config.defaults import HTTP_MAX_CONNECTIONS, HTTP_MAX_KEEPALIVE_CONNECTIONS
from ..timeouts import get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()


def build_timeout(purpose: str) -> httpx.Timeout:
    """Return the ``httpx.Timeout`` used for clients of ``purpose``."""
    cfg = get_timeout_config()
    read = cfg.stream_timeout_seconds if purpose == "stream" else cfg.http_timeout_seconds
    return httpx.Timeout(read, connect=cfg.start_timeout_seconds)


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    The first request for a key creates the client; later requests reuse it.
    Safe for concurrent use.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        limits = httpx.Limits(
            max_connections=HTTP_MAX_CONNECTIONS,
            max_keepalive_connections=HTTP_MAX_KEEPALIVE_CONNECTIONS,
        )
        timeout = build_timeout(purpose)
        if base_url:
            client = httpx.Client(base_url=base_url, timeout=timeout, limits=limits)
        else:
            client = httpx.Client(timeout=timeout, limits=limits)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            try:
                c.close()
            except Exception:  # nosec B110 - best-effort shutdown
                pass
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients", "build_timeout"]
