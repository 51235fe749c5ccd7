"""Responses API client facade.

``OpenAIResponsesClient`` ties the pieces together:

- requests are validated by :func:`build_request` before any transport call
- ``create_response`` performs the blocking round trip and maps the body
  through ``Response.from_dict``
- ``stream_response`` opens the stream (start phase guarded by
  :func:`operation_timeout`) and returns a :class:`ResponseStream`

Transport failures are classified into the error taxonomy with the original
exception chained. Cancellation is never converted into an error.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Optional

from ..base.cancellation import CancellationToken, CancelledError
from ..base.dto import ResponseRequest, build_request
from ..base.dto.request_factory import InputLike
from ..base.errors import MalformedEventError, ResponsesError, to_responses_error
from ..base.interfaces import ResponsesTransport
from ..base.log_support import LogContext
from ..base.logging import get_logger, normalized_log_event
from ..base.models import Response, validate_usage
from ..base.streaming import ResponseStream
from ..base.timeouts import get_timeout_config, operation_timeout
from ..config import get_client_config
from .transport import HttpxResponsesTransport

__all__ = ["OpenAIResponsesClient"]


class OpenAIResponsesClient:
    """Client for the responses endpoint with blocking and streaming modes.

    Parameters:
        transport: Any :class:`ResponsesTransport`; defaults to
            :class:`HttpxResponsesTransport` built from the merged config.
        model / base_url / api_key: Overrides applied on top of defaults,
            environment and config file.
    """

    def __init__(
        self,
        transport: Optional[ResponsesTransport] = None,
        *,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> None:
        cfg = get_client_config({"model": model, "base_url": base_url, "api_key": api_key})
        self.default_model: str = cfg["model"]
        self._transport = transport or HttpxResponsesTransport(cfg["base_url"], api_key=cfg.get("api_key"))
        self._logger = get_logger("responses_client.openai")

    @property
    def transport(self) -> ResponsesTransport:
        return self._transport

    def build_request(self, input: InputLike, *, model: Optional[str] = None, **kwargs: Any) -> ResponseRequest:  # noqa: A002
        """Validate and build a request, defaulting ``model`` to the configured one."""
        return build_request(model or self.default_model, input, **kwargs)

    def _context(self, request: ResponseRequest, mode: str) -> LogContext:
        return LogContext(model=request.model, mode=mode, request_id=uuid.uuid4().hex)

    def _fail(self, exc: Exception, ctx: LogContext, phase: str) -> ResponsesError:
        err = to_responses_error(exc)
        normalized_log_event(
            self._logger,
            "request.error",
            ctx,
            phase=phase,
            level=logging.WARNING,
            error_code=err.code.value,
            emitted=False,
            status_code=err.status_code,
            error=err.message,
        )
        return err

    def create_response(self, request: ResponseRequest) -> Response:
        """Perform a blocking request and return the complete ``Response``.

        Raises:
            ResponsesError: classified transport or decoding failure.
        """
        ctx = self._context(request, "blocking")
        payload = request.with_stream(False).to_payload()
        normalized_log_event(self._logger, "request.start", ctx, phase="start")
        t0 = time.perf_counter()
        try:
            data = self._transport.submit(payload)
        except CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001 - classified below
            raise self._fail(exc, ctx, "start") from exc
        try:
            response = Response.from_dict(data)
        except ValueError as exc:
            raise self._fail(
                MalformedEventError(f"undecodable response body: {exc}", reason="invalid response", raw=data),
                ctx,
                "decode",
            ) from exc
        ok, reason = validate_usage(response.usage)
        if not ok:
            raise self._fail(
                MalformedEventError(f"inconsistent usage: {reason}", reason="usage mismatch", raw=data), ctx, "decode"
            )
        ctx.response_id = response.id
        normalized_log_event(
            self._logger,
            "request.end",
            ctx,
            phase="finalize",
            emitted=bool(response.output),
            tokens=response.usage.as_metrics() if response.usage else None,
            status=response.status.value,
            total_duration_ms=(time.perf_counter() - t0) * 1000.0,
        )
        return response

    def stream_response(self, request: ResponseRequest, *, token: Optional[CancellationToken] = None) -> ResponseStream:
        """Open a stream for ``request`` and return its driver.

        Raises:
            CancelledError: ``token`` was already cancelled.
            ResponsesError: the stream could not be opened.
        """
        token = token or CancellationToken()
        token.raise_if_cancelled()
        ctx = self._context(request, "stream")
        payload = request.with_stream(True).to_payload()
        try:
            with operation_timeout(get_timeout_config().start_timeout_seconds):
                records = self._transport.submit_streaming(payload)
        except CancelledError:
            raise
        except Exception as exc:  # noqa: BLE001 - classified below
            raise self._fail(exc, ctx, "start") from exc
        return ResponseStream(records, token=token, ctx=ctx, logger=self._logger)
