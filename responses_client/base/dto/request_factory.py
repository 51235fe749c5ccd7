"""
Validating factory for ``ResponseRequest``.

``build_request`` is the single construction path used by the client. It is
pure: no I/O, no configuration lookups. Every rule lives in the DTOs; this
module only normalizes inputs and converts ``pydantic.ValidationError`` into
``InvalidRequestError`` with a short ``reason``.
"""
from __future__ import annotations

from typing import Any, List, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ValidationError

from ..errors_parts.responses_error import InvalidRequestError
from .request import MessageInput, ReasoningConfig, ResponseRequest

InputLike = Union[str, Sequence[Union[BaseModel, Mapping[str, Any]]]]


def _normalize_input(value: InputLike) -> List[Any]:
    if isinstance(value, str):
        return [MessageInput(role="user", content=value)] if value else []
    return list(value)


def _reason_from(exc: ValidationError) -> str:
    """Return the message of the first validation error, without pydantic's prefix."""
    errors = exc.errors()
    if not errors:
        return "invalid request"
    first = errors[0]
    original = (first.get("ctx") or {}).get("error")
    if isinstance(original, Exception):
        return str(original)
    loc = ".".join(str(p) for p in first.get("loc", ()))
    msg = first.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


def build_request(
    model: str,
    input: InputLike,  # noqa: A002 - wire field name
    *,
    reasoning: Optional[Union[ReasoningConfig, Mapping[str, Any]]] = None,
    include: Optional[Sequence[str]] = None,
    temperature: Optional[float] = None,
    max_output_tokens: Optional[int] = None,
    instructions: Optional[str] = None,
    stream: bool = False,
    store: Optional[bool] = None,  # noqa: ARG001 - always false on the wire
) -> ResponseRequest:
    """Construct and validate a ``ResponseRequest``.

    A plain string ``input`` becomes one user message. ``store`` is accepted
    for call-site compatibility and ignored; requests never ask the server to
    store the response.

    Raises:
        InvalidRequestError: ``reason`` is one of ``"token cap below minimum"``,
            ``"empty input"``, ``"reasoning continuation content must be empty"``,
            or the first pydantic error message for any other rule.
    """
    try:
        return ResponseRequest(
            model=model,
            input=_normalize_input(input),
            reasoning=reasoning,
            include=list(include) if include is not None else None,
            temperature=temperature,
            max_output_tokens=max_output_tokens,
            instructions=instructions,
            stream=stream,
        )
    except ValidationError as exc:
        reason = _reason_from(exc)
        raise InvalidRequestError(f"invalid request: {reason}", reason=reason, raw=exc) from exc


__all__ = ["build_request", "InputLike"]
