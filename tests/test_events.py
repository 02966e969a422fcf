"""Tests for terminal signals, observers and producer errors."""

from __future__ import annotations

import pytest

from pushbridge.core.errors import BridgeError, ProducerError
from pushbridge.events import (
    CallbackObserver,
    Completed,
    Failed,
    completed,
    deliver_terminal,
    failed,
)
from tests.mocks import RecordingObserver


def test_completed_signals_are_equal() -> None:
    assert completed() == Completed()
    assert str(completed()) == "done"


def test_failed_wraps_payload() -> None:
    signal = failed("E")
    assert isinstance(signal, Failed)
    assert isinstance(signal.error, ProducerError)
    assert signal.error.payload == "E"
    assert str(signal) == "failed('E')"


def test_failed_keeps_existing_producer_error() -> None:
    error = ProducerError("E")
    assert failed(error).error is error


def test_signals_are_immutable() -> None:
    signal = failed("E")
    with pytest.raises(AttributeError):
        signal.error = ProducerError("other")  # type: ignore[misc]


def test_producer_error_carries_exception_payload() -> None:
    cause = ValueError("bad frame")
    error = ProducerError(cause)
    assert isinstance(error, BridgeError)
    assert error.code == "producer_error"
    assert error.original_error is cause
    assert error.details == {"payload": cause}


def test_producer_error_with_plain_payload() -> None:
    error = ProducerError({"status": 503})
    assert error.original_error is None
    assert error.payload == {"status": 503}
    assert "503" in str(error)


def test_callback_observer_defaults_to_noops() -> None:
    observer = CallbackObserver()
    observer.on_value(1)
    observer.on_error(ProducerError("E"))
    observer.on_complete()


def test_callback_observer_routes_calls() -> None:
    calls: list[object] = []
    observer = CallbackObserver(
        on_value=calls.append,
        on_error=lambda e: calls.append(("error", e.payload)),
        on_complete=lambda: calls.append("complete"),
    )
    observer.on_value(1)
    observer.on_error(ProducerError("E"))
    observer.on_complete()
    assert calls == [1, ("error", "E"), "complete"]


def test_deliver_terminal_routes_by_signal_type() -> None:
    obs = RecordingObserver()
    deliver_terminal(obs, failed("E"))
    deliver_terminal(obs, completed())
    assert obs.received == [("failed", "E"), "done"]
