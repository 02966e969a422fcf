"""Read-only stream view handed to consumers."""

from __future__ import annotations

from collections.abc import Callable
from typing import Generic, TypeVar

from pushbridge.core.errors import ProducerError
from pushbridge.events import CallbackObserver, Observer, TerminalSignal
from pushbridge.stream.subject import Subject, Subscription

T = TypeVar("T")


class Stream(Generic[T]):
    """Subscribe-only facade over a Subject.

    Holds no reference that lets a consumer emit or terminate: only the owner
    of the Subject can do that.
    """

    __slots__ = ("_subject",)

    def __init__(self, subject: Subject[T]) -> None:
        self._subject = subject

    def subscribe(
        self,
        on_value: Callable[[T], None] | None = None,
        on_error: Callable[[ProducerError], None] | None = None,
        on_complete: Callable[[], None] | None = None,
    ) -> Subscription[T]:
        """Attach callbacks; any of them may be omitted."""
        return self._subject.subscribe(CallbackObserver(on_value, on_error, on_complete))

    def subscribe_observer(self, observer: Observer[T]) -> Subscription[T]:
        """Attach an object implementing on_value/on_error/on_complete."""
        return self._subject.subscribe(observer)

    @property
    def terminated(self) -> bool:
        return self._subject.terminated

    @property
    def terminal(self) -> TerminalSignal | None:
        return self._subject.terminal

    @property
    def subscriber_count(self) -> int:
        return self._subject.subscriber_count

    def __repr__(self) -> str:
        return f"<Stream of {self._subject.name}>"
