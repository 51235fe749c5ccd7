"""Server-sent events framing for the streaming endpoint.

Only ``data:`` fields matter: each event's data lines are joined with
newlines and decoded as JSON. Comment lines (``:``) and other fields
(``event:``, ``id:``, ``retry:``) are ignored; the event tag travels inside
the JSON ``type`` field. A ``[DONE]`` payload ends the stream.

A payload that is not valid JSON raises ``json.JSONDecodeError``, which the
error classifier maps to ``malformed_event``.
"""
from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Iterator, List

DONE_SENTINEL = "[DONE]"


def _field(line: str) -> tuple[str, str]:
    name, _, value = line.partition(":")
    if value.startswith(" "):
        value = value[1:]
    return name, value


def iter_sse_records(lines: Iterable[str]) -> Iterator[Dict[str, Any]]:
    """Yield one decoded JSON record per SSE event found in ``lines``."""
    data: List[str] = []
    for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        if line == "":
            if data:
                payload = "\n".join(data)
                data = []
                if payload.strip() == DONE_SENTINEL:
                    return
                yield json.loads(payload)
            continue
        if line.startswith(":"):
            continue
        name, value = _field(line)
        if name == "data":
            data.append(value)
    if data:
        payload = "\n".join(data)
        if payload.strip() != DONE_SENTINEL:
            yield json.loads(payload)


__all__ = ["iter_sse_records", "DONE_SENTINEL"]
