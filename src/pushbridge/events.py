"""Terminal signals and the observer interface consumers implement."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar, Union

from pushbridge.core.errors import ProducerError

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)


@dataclass(frozen=True)
class Completed:
    """Stream ended normally."""

    def __str__(self) -> str:
        return "done"


@dataclass(frozen=True)
class Failed:
    """Stream ended because the producer reported a failure."""

    error: ProducerError

    def __str__(self) -> str:
        return f"failed({self.error.payload!r})"


TerminalSignal = Union[Completed, Failed]


def completed() -> Completed:
    return Completed()


def failed(payload: object) -> Failed:
    """Build a Failed signal; payload is wrapped into a ProducerError."""
    return Failed(error=ProducerError.wrap(payload))


class Observer(Protocol[T_contra]):
    """Consumer interface: one value callback, two terminal callbacks."""

    def on_value(self, value: T_contra) -> None:
        ...

    def on_error(self, error: ProducerError) -> None:
        ...

    def on_complete(self) -> None:
        ...


def _noop(*_args: Any) -> None:
    return None


class CallbackObserver(Generic[T]):
    """Observer built from plain callables. Missing handlers are no-ops."""

    __slots__ = ("_on_value", "_on_error", "_on_complete")

    def __init__(
        self,
        on_value: Callable[[T], None] | None = None,
        on_error: Callable[[ProducerError], None] | None = None,
        on_complete: Callable[[], None] | None = None,
    ) -> None:
        self._on_value = on_value or _noop
        self._on_error = on_error or _noop
        self._on_complete = on_complete or _noop

    def on_value(self, value: T) -> None:
        self._on_value(value)

    def on_error(self, error: ProducerError) -> None:
        self._on_error(error)

    def on_complete(self) -> None:
        self._on_complete()

    def __repr__(self) -> str:
        return f"CallbackObserver({self._on_value!r})"


def deliver_terminal(observer: Observer[Any], signal: TerminalSignal) -> None:
    """Route a terminal signal to the matching observer callback."""
    if isinstance(signal, Failed):
        observer.on_error(signal.error)
    else:
        observer.on_complete()
