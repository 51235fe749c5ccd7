"""responses_client.config.env
============================

Environment variable names and small helpers for credentials.

Design Notes
------------
- ``ENV_MAP`` maps each config field to its canonical variable.
- ``ENV_ALIASES`` lists accepted names per field, canonical first, which
  establishes precedence (``RESPONSES_API_KEY`` wins over ``OPENAI_API_KEY``).
- Helpers never raise on unset variables; callers decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

ENV_MAP: Dict[str, str] = {
    "api_key": "RESPONSES_API_KEY",  # pragma: allowlist secret - env var name, not a secret
    "base_url": "RESPONSES_BASE_URL",
    "model": "RESPONSES_MODEL",
}

ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "api_key": ("RESPONSES_API_KEY", "OPENAI_API_KEY"),
}

CONFIG_FILE_ENV = "RESPONSES_CONFIG_FILE"


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if ``val`` looks like a placeholder or test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts with
    'test_'. Case-insensitive; surrounding whitespace is ignored.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_candidates(field: str) -> Iterable[str]:
    """Yield acceptable environment variable names for ``field``, canonical first."""
    canonical = ENV_MAP.get(field)
    if canonical:
        yield canonical
    for alias in ENV_ALIASES.get(field, ()):
        if alias != canonical:
            yield alias


def resolve_env_value(field: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_name)`` for the first usable variable of ``field``.

    Empty and placeholder values are skipped. ``(None, None)`` when nothing
    usable is set.
    """
    for name in get_env_var_candidates(field):
        val = os.getenv(name)
        if val and val.strip() and not is_placeholder(val):
            return val.strip(), name
    return None, None


__all__ = [
    "ENV_MAP",
    "ENV_ALIASES",
    "CONFIG_FILE_ENV",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_env_value",
]
