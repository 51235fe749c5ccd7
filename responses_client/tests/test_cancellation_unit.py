"""CancellationToken behaviour: reasons, callbacks, cascading children."""
from __future__ import annotations

import threading

import pytest

from responses_client.base.cancellation import CancellationToken, CancelledError


def test_cancel_records_first_reason_only():
    token = CancellationToken()
    token.cancel("first")
    token.cancel("second")
    assert token.cancelled and token.reason == "first"  # nosec B101


def test_raise_if_cancelled():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel("stop")
    with pytest.raises(CancelledError) as exc:
        token.raise_if_cancelled()
    assert exc.value.reason == "stop"  # nosec B101


def test_callbacks_run_once_in_order():
    token = CancellationToken()
    seen = []
    token.on_cancel(lambda r: seen.append(("a", r)))
    token.on_cancel(lambda r: seen.append(("b", r)))
    token.cancel("bye")
    token.cancel("again")
    assert seen == [("a", "bye"), ("b", "bye")]  # nosec B101


def test_late_callback_runs_immediately():
    token = CancellationToken()
    token.cancel()
    seen = []
    token.on_cancel(seen.append)
    assert seen == ["operation cancelled"]  # nosec B101


def test_failing_callback_does_not_block_others():
    token = CancellationToken()
    seen = []

    def broken(_reason):
        raise RuntimeError("boom")

    token.on_cancel(broken)
    token.on_cancel(seen.append)
    token.cancel("x")
    assert seen == ["x"]  # nosec B101


def test_children_inherit_cancellation():
    parent = CancellationToken()
    child = parent.child()
    parent.cancel("shutdown")
    assert child.cancelled and child.reason == "shutdown"  # nosec B101

    late = CancellationToken(parent=parent)
    assert late.cancelled  # nosec B101


def test_child_cancel_does_not_touch_parent():
    parent = CancellationToken()
    child = parent.child()
    child.cancel()
    assert not parent.cancelled  # nosec B101


def test_cancel_from_other_thread():
    token = CancellationToken()
    worker = threading.Thread(target=token.cancel, args=("remote",))
    worker.start()
    worker.join()
    assert token.reason == "remote"  # nosec B101


def test_unregistered_callback_is_dropped_and_not_run():
    token = CancellationToken()
    seen = []
    unregister = token.on_cancel(lambda r: seen.append(("gone", r)))
    token.on_cancel(lambda r: seen.append(("kept", r)))
    unregister()
    unregister()
    assert len(token._state.callbacks) == 1  # nosec B101
    token.cancel("bye")
    assert seen == [("kept", "bye")]  # nosec B101


def test_unregister_after_late_registration_is_harmless():
    token = CancellationToken()
    token.cancel("done")
    unregister = token.on_cancel(lambda r: None)
    unregister()
    assert token._state.callbacks == []  # nosec B101
