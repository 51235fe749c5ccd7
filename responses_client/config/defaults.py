"""responses_client.config.defaults
================================

Small, stable default values used across the client. These can be overridden
via environment variables or an external config file (see
``responses_client.config``), but provide sensible fallbacks for local
development and tests.

Only plain constants live here; this module imports nothing from the rest of
the package.
"""

from __future__ import annotations

# Model selected when neither the environment nor the caller names one.
DEFAULT_MODEL = "gpt-5"
# Root of the responses API; the transport appends ``/responses``.
DEFAULT_BASE_URL = "https://api.openai.com/v1"

# Smallest output token cap the remote API accepts.
MIN_OUTPUT_TOKENS = 16

# Connection pool limits for the shared httpx client.
HTTP_MAX_CONNECTIONS = 20
HTTP_MAX_KEEPALIVE_CONNECTIONS = 10

# Error payload messages are truncated to this many characters in logs.
ERROR_MESSAGE_MAX_CHARS = 260

__all__ = [
    "DEFAULT_MODEL",
    "DEFAULT_BASE_URL",
    "MIN_OUTPUT_TOKENS",
    "HTTP_MAX_CONNECTIONS",
    "HTTP_MAX_KEEPALIVE_CONNECTIONS",
    "ERROR_MESSAGE_MAX_CHARS",
]
