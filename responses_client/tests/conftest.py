"""Shared fixtures for the responses_client test suite.

Environment variables read by the config and timeout layers are cleared for
every test so results never depend on the developer's shell.
"""

from __future__ import annotations

import copy
import json
import logging
from typing import Any, Dict, Iterator, List

import pytest

from responses_client.config import reset_config_cache
from responses_client.mock import load_fixture_catalog

_ENV_VARS = (
    "RESPONSES_API_KEY",
    "OPENAI_API_KEY",
    "RESPONSES_BASE_URL",
    "RESPONSES_MODEL",
    "RESPONSES_CONFIG_FILE",
    "RESPONSES_LOG_LEVEL",
    "RC_TIMEOUT_START_SECONDS",
    "RC_TIMEOUT_STREAM_SECONDS",
    "RC_TIMEOUT_HTTP_SECONDS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture(scope="session")
def catalog() -> Dict[str, Any]:
    return load_fixture_catalog()


@pytest.fixture()
def hello_events(catalog) -> List[Dict[str, Any]]:
    """Wire records of the five-event ``Hello`` stream."""
    return copy.deepcopy(catalog["fixtures"]["hello"]["events"])


@pytest.fixture()
def reasoning_events(catalog) -> List[Dict[str, Any]]:
    return copy.deepcopy(catalog["fixtures"]["reasoning"]["events"])


class ListHandler(logging.Handler):
    """Capture formatted log messages for assertions."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.messages: List[str] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.messages.append(record.getMessage())

    def payloads(self) -> List[Dict[str, Any]]:
        out = []
        for msg in self.messages:
            try:
                out.append(json.loads(msg))
            except ValueError:
                continue
        return out

    def events(self) -> List[str]:
        return [p.get("event") for p in self.payloads()]


@pytest.fixture()
def log_capture() -> Iterator[ListHandler]:
    """Attach a ``ListHandler`` to the shared ``responses_client`` logger."""
    from responses_client.base.logging import get_logger

    base = get_logger("responses_client")
    handler = ListHandler()
    previous_level = base.level
    base.addHandler(handler)
    base.setLevel(logging.DEBUG)
    try:
        yield handler
    finally:
        base.removeHandler(handler)
        base.setLevel(previous_level)
