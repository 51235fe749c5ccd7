"""Unified timeout utilities for the responses client.

Centralizes timeout values used by the transport (HTTP calls, stream start)
and by ``ResponseStream`` (bounded waits for the next event or for
finalization), and exposes a context manager for wall clock enforcement.

Key Components
--------------
TimeoutConfig
    Dataclass capturing normalized timeout values.

get_timeout_config()
    Returns a process-cached configuration, parsing environment overrides on
    first use only. Supported environment variables (all optional):
        RC_TIMEOUT_START_SECONDS
        RC_TIMEOUT_STREAM_SECONDS
        RC_TIMEOUT_HTTP_SECONDS

operation_timeout(seconds, on_expire=None)
    Context manager using SIGALRM where available (Unix main thread) and a
    threading.Timer fallback otherwise. Nests safely, restoring any
    preexisting alarm configuration.

Failure Modes
-------------
TimeoutError raised within the guarded context if the deadline elapses.
The fallback timer mode raises only after the guarded body returns
(cooperative); an ``on_expire`` hook runs at the deadline so the caller can
abort the blocked work itself.
"""
from __future__ import annotations

from contextlib import contextmanager, suppress
from dataclasses import dataclass
import os
import signal
import threading
import time
from typing import Callable, Iterator, Optional, Tuple


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        start_timeout_seconds: Timeout for opening the streaming connection.
        stream_timeout_seconds: Idle timeout while waiting for the next event.
        http_timeout_seconds: Baseline timeout for blocking requests.
    """

    start_timeout_seconds: float = 30.0
    stream_timeout_seconds: float = 60.0
    http_timeout_seconds: float = 60.0


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None
_ENV_NAMES = ("RC_TIMEOUT_START_SECONDS", "RC_TIMEOUT_STREAM_SECONDS", "RC_TIMEOUT_HTTP_SECONDS")


def _parse_env_float(name: str, default: float) -> float:
    """Parse a positive float from the environment, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
        return val if val > 0 else default
    except ValueError:
        return default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig` instance.

    The cache is refreshed when any of the supported environment variables
    changed since the last computation, which keeps tests deterministic.
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    cur_guard = "/".join(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == cur_guard:
        return _CACHED

    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        start_timeout_seconds=_parse_env_float("RC_TIMEOUT_START_SECONDS", defaults.start_timeout_seconds),
        stream_timeout_seconds=_parse_env_float("RC_TIMEOUT_STREAM_SECONDS", defaults.stream_timeout_seconds),
        http_timeout_seconds=_parse_env_float("RC_TIMEOUT_HTTP_SECONDS", defaults.http_timeout_seconds),
    )
    _ENV_GUARD = cur_guard
    return _CACHED


def _setup_signal_timeout(seconds: float):
    """Attempt to install a SIGALRM-based timeout.

    Returns tuple (use_signal, old_handler, old_itimer, start_monotonic).
    Falls back (False, None, None, None) if unsupported or setup fails.
    """
    if not (
        hasattr(signal, "setitimer")
        and threading.current_thread() is threading.main_thread()
    ):
        return False, None, None, None

    def _raise_timeout(signum=None, frame=None):  # noqa: ARG001
        raise TimeoutError(f"operation exceeded {seconds}s")

    try:  # pragma: no cover - platform specific
        old_handler = signal.getsignal(signal.SIGALRM)
        signal.signal(signal.SIGALRM, _raise_timeout)  # type: ignore[arg-type]
        old_itimer = signal.setitimer(signal.ITIMER_REAL, seconds)  # type: ignore[arg-type]
        return True, old_handler, old_itimer, time.monotonic()
    except (OSError, ValueError):  # pragma: no cover - platform specific
        return False, None, None, None


def _restore_signal_timeout(
    old_handler, old_itimer: Optional[Tuple[float, float]], start_monotonic: Optional[float]
):
    """Restore any prior alarm + handler (supports nesting)."""
    with suppress(OSError, ValueError):  # pragma: no cover - platform specific
        signal.setitimer(signal.ITIMER_REAL, 0)
        if old_handler is not None:
            signal.signal(signal.SIGALRM, old_handler)  # type: ignore[arg-type]
        if old_itimer and old_itimer[0] > 0:
            remaining = old_itimer[0]
            if start_monotonic is not None:
                remaining = max(0.0, remaining - (time.monotonic() - start_monotonic))
            if remaining > 0:
                signal.setitimer(signal.ITIMER_REAL, remaining, old_itimer[1])  # type: ignore[arg-type]


@contextmanager
def operation_timeout(
    seconds: float | None, *, on_expire: Optional[Callable[[], None]] = None
) -> Iterator[None]:
    """Context manager enforcing a wall-clock timeout.

    If `seconds` is ``None`` or <= 0 the guard is inert. In fallback mode
    ``on_expire`` runs on the timer thread at the deadline, which lets the
    caller unblock the guarded body (for example by closing its connection).
    """
    if seconds is None or seconds <= 0:
        yield
        return

    use_signal, old_handler, old_itimer, start_monotonic = _setup_signal_timeout(seconds)
    expired = False
    timer = None

    if not use_signal:
        def _expire():  # pragma: no cover - timing sensitive
            nonlocal expired
            expired = True
            if on_expire is not None:
                with suppress(Exception):
                    on_expire()

        timer = threading.Timer(seconds, _expire)
        timer.daemon = True
        timer.start()

    try:
        yield
        if not use_signal and expired:
            raise TimeoutError(f"operation exceeded {seconds}s (fallback)")
    finally:
        if use_signal:
            _restore_signal_timeout(old_handler, old_itimer, start_monotonic)
        elif timer is not None:
            timer.cancel()


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
    "operation_timeout",
]
