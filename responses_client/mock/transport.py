"""Deterministic transport backed by JSON fixtures for offline testing.

Purpose
-------
Implement the ``ResponsesTransport`` protocol without any network traffic.
Each fixture carries the blocking response body and the event records of the
equivalent stream, so both delivery modes can be exercised and compared.

Fixtures are loaded via ``importlib.resources`` from
``responses_client.mock.fixtures``.
"""

from __future__ import annotations

import copy
import json
from importlib import resources
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

_FIXTURE_RESOURCE = "responses.json"


def load_fixture_catalog(resource: str = _FIXTURE_RESOURCE) -> Dict[str, Any]:
    """Load the JSON fixture catalog bundled with the mock transport."""
    package = "responses_client.mock.fixtures"
    data = resources.files(package).joinpath(resource).read_text(encoding="utf-8")
    return json.loads(data)


class FixtureRecordStream:
    """Closeable iterator over fixture records.

    ``raise_after`` makes the stream raise ``error`` once that many records
    were delivered, which simulates a mid-stream transport failure.
    """

    def __init__(
        self,
        records: Sequence[Mapping[str, Any]],
        *,
        raise_after: Optional[int] = None,
        error: Optional[BaseException] = None,
    ) -> None:
        self._records = [copy.deepcopy(dict(r)) for r in records]
        self._raise_after = raise_after
        self._error = error
        self.delivered = 0
        self.closed = False

    def __iter__(self) -> "FixtureRecordStream":
        return self

    def __next__(self) -> Dict[str, Any]:
        if self.closed:
            raise StopIteration
        if self._raise_after is not None and self.delivered >= self._raise_after and self._error is not None:
            raise self._error
        if self.delivered >= len(self._records):
            raise StopIteration
        record = self._records[self.delivered]
        self.delivered += 1
        return record

    def close(self) -> None:
        self.closed = True


class MockResponsesTransport:
    """Transport returning canned fixture data.

    Parameters
    ----------
    fixture: str | None
        Fixture name in the catalog; defaults to the catalog's
        ``default_fixture``.
    catalog: dict | None
        Pre-parsed catalog, mainly for tests injecting custom data.
    events: sequence | None
        Explicit stream records overriding the fixture's.
    raise_after / error:
        Forwarded to :class:`FixtureRecordStream`.
    """

    def __init__(
        self,
        fixture: Optional[str] = None,
        *,
        catalog: Optional[Dict[str, Any]] = None,
        events: Optional[Sequence[Mapping[str, Any]]] = None,
        raise_after: Optional[int] = None,
        error: Optional[BaseException] = None,
    ) -> None:
        self._catalog = catalog or load_fixture_catalog()
        name = fixture or self._catalog.get("default_fixture", "hello")
        try:
            self._fixture: Mapping[str, Any] = self._catalog["fixtures"][name]
        except KeyError as exc:
            raise KeyError(f"unknown fixture: {name}") from exc
        self._events = list(events) if events is not None else list(self._fixture.get("events", []))
        self._raise_after = raise_after
        self._error = error
        self.payloads: List[Dict[str, Any]] = []
        self.streams: List[FixtureRecordStream] = []

    @property
    def fixture(self) -> Mapping[str, Any]:
        return self._fixture

    def submit(self, payload: Mapping[str, Any]) -> Mapping[str, Any]:
        self.payloads.append(dict(payload))
        return copy.deepcopy(self._fixture["response"])

    def submit_streaming(self, payload: Mapping[str, Any]) -> Iterator[Mapping[str, Any]]:
        self.payloads.append(dict(payload))
        stream = FixtureRecordStream(self._events, raise_after=self._raise_after, error=self._error)
        self.streams.append(stream)
        return stream


__all__ = ["MockResponsesTransport", "FixtureRecordStream", "load_fixture_catalog"]
