"""Unified configuration layer for the responses client.

Sources are merged in a predictable order:

1. Built-in defaults (``config.defaults``)
2. Environment variables (``RESPONSES_MODEL``, ``RESPONSES_BASE_URL``,
   ``RESPONSES_API_KEY`` with alias ``OPENAI_API_KEY``)
3. Optional JSON file pointed to by ``RESPONSES_CONFIG_FILE``
4. In-code overrides passed to ``get_client_config``

Later sources win. ``None`` values never override an earlier source.

External config file example::

    {"model": "gpt-5-mini", "base_url": "http://localhost:8080/v1"}

Public API
----------
* get_client_config(overrides: dict | None = None) -> dict
* reset_config_cache() -> None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .defaults import DEFAULT_BASE_URL, DEFAULT_MODEL
from .env import CONFIG_FILE_ENV, ENV_MAP, is_placeholder, resolve_env_value

DEFAULTS: Dict[str, Any] = {
    "model": DEFAULT_MODEL,
    "base_url": DEFAULT_BASE_URL,
    "api_key": None,
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_FILE_CACHE_PATH: Optional[str] = None


def _load_external_config() -> Dict[str, Any]:
    """Load the JSON config file, cached per path.

    A missing or undecodable file yields ``{}``; only a top-level object is
    accepted.
    """
    global _FILE_CACHE, _FILE_CACHE_PATH  # noqa: PLW0603 - documented module cache
    path = os.getenv(CONFIG_FILE_ENV)
    if _FILE_CACHE is not None and _FILE_CACHE_PATH == path:
        return _FILE_CACHE
    data: Dict[str, Any] = {}
    if path and Path(path).is_file():
        try:
            loaded = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            loaded = {}
        if isinstance(loaded, dict):
            data = loaded
    _FILE_CACHE, _FILE_CACHE_PATH = data, path
    return data


def reset_config_cache() -> None:
    """Forget the cached config file contents (used by tests)."""
    global _FILE_CACHE, _FILE_CACHE_PATH  # noqa: PLW0603
    _FILE_CACHE = None
    _FILE_CACHE_PATH = None


def _env_layer() -> Dict[str, Any]:
    layer: Dict[str, Any] = {}
    for field in ENV_MAP:
        value, _ = resolve_env_value(field)
        if value is not None:
            layer[field] = value
    return layer


def get_client_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged client configuration.

    Keys: ``model``, ``base_url``, ``api_key`` (the latter may be ``None``).
    Placeholder API keys from the file layer are discarded like env ones.
    """
    merged: Dict[str, Any] = dict(DEFAULTS)
    for layer in (_env_layer(), _load_external_config(), overrides or {}):
        for key, value in layer.items():
            if value is None:
                continue
            if key == "api_key" and is_placeholder(value):
                continue
            merged[key] = value
    return merged


__all__ = ["DEFAULTS", "get_client_config", "reset_config_cache"]
