"""Multicast subject: fan-out of values with a single terminal signal.

State (the active subscriptions and the terminal signal) is guarded by one
lock per Subject. Callbacks are never invoked while any lock is held: every
broadcast takes a snapshot under the Subject lock and dispatches after
releasing it, so a callback may call subscribe, cancel, emit or complete on
the same Subject from any thread.

Each Subscription keeps a FIFO mailbox. Whichever thread finds the mailbox
idle drains it; others only enqueue. Deliveries to one subscription are
therefore never concurrent and keep their order, and a value can never land
after the subscription's terminal signal. A re-entrant emit that reaches a
subscription already being drained is queued and delivered once the current
callback returns.
"""

from __future__ import annotations

import itertools
import threading
from collections import deque
from typing import Any, Generic, Literal, TypeVar, Union

from loguru import logger

from pushbridge.events import Observer, TerminalSignal, deliver_terminal

T = TypeVar("T")

_State = Literal["active", "sealed", "closed"]

_ids = itertools.count(1)


class _Value:
    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value


_Item = Union[_Value, TerminalSignal]


class Subscription(Generic[T]):
    """A consumer's handle on a Subject.

    ``active`` subscriptions receive values. ``sealed`` ones are waiting for
    the terminal signal a completing Subject is about to deliver. ``closed``
    ones never receive anything again.
    """

    def __init__(
        self,
        subject: Subject[T],
        observer: Observer[T],
        *,
        state: _State = "active",
    ) -> None:
        self._id = next(_ids)
        self._subject = subject
        self._observer = observer
        self._state: _State = state
        self._lock = threading.Lock()
        self._mailbox: deque[_Item] = deque()
        self._draining = False

    @property
    def id(self) -> int:
        return self._id

    @property
    def active(self) -> bool:
        """True while the subscription can still receive values."""
        return self._state == "active"

    def cancel(self) -> None:
        """Stop deliveries. Safe to call any number of times."""
        self._subject.cancel(self)

    def __enter__(self) -> Subscription[T]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()

    def __repr__(self) -> str:
        return f"<Subscription id={self._id} state={self._state}>"

    def _close(self) -> None:
        with self._lock:
            self._state = "closed"
            self._mailbox.clear()

    def _seal(self) -> None:
        with self._lock:
            if self._state == "active":
                self._state = "sealed"

    def _deliver_value(self, value: T) -> None:
        with self._lock:
            if self._state != "active":
                return
            self._mailbox.append(_Value(value))
            if self._draining:
                return
            self._draining = True
        self._drain()

    def _deliver_terminal(self, signal: TerminalSignal, *, force: bool = False) -> None:
        with self._lock:
            if self._state != "sealed" and not force:
                return
            self._state = "closed"
            self._mailbox.append(signal)
            if self._draining:
                return
            self._draining = True
        self._drain()

    def _drain(self) -> None:
        while True:
            with self._lock:
                if not self._mailbox:
                    self._draining = False
                    return
                item = self._mailbox.popleft()
            try:
                if isinstance(item, _Value):
                    self._observer.on_value(item.value)
                else:
                    deliver_terminal(self._observer, item)
            except Exception as exc:
                logger.exception(
                    "{}: subscriber {} failed to handle {}: {}",
                    self._subject.name,
                    self._id,
                    "value" if isinstance(item, _Value) else item,
                    exc,
                )


class Subject(Generic[T]):
    """Hot multicast stream with no buffering and no replay."""

    def __init__(self, name: str = "subject") -> None:
        self._name = name
        self._lock = threading.Lock()
        self._subscriptions: dict[int, Subscription[T]] = {}
        self._terminal: TerminalSignal | None = None

    @property
    def name(self) -> str:
        return self._name

    @property
    def terminal(self) -> TerminalSignal | None:
        """The terminal signal, or None while the stream is live."""
        return self._terminal

    @property
    def terminated(self) -> bool:
        return self._terminal is not None

    @property
    def subscriber_count(self) -> int:
        with self._lock:
            return len(self._subscriptions)

    def subscribe(self, observer: Observer[T]) -> Subscription[T]:
        """Attach an observer.

        On a terminated Subject the stored terminal signal is delivered right
        away and the returned subscription is already inactive.
        """
        with self._lock:
            terminal = self._terminal
            if terminal is None:
                subscription = Subscription(self, observer)
                self._subscriptions[subscription.id] = subscription
        if terminal is not None:
            subscription = Subscription(self, observer, state="closed")
            logger.debug("{}: late subscriber {} gets {}", self._name, subscription.id, terminal)
            subscription._deliver_terminal(terminal, force=True)
            return subscription
        logger.debug("{}: subscribed {}", self._name, subscription.id)
        return subscription

    def emit(self, value: T) -> None:
        """Deliver value to every subscription active when the call starts."""
        with self._lock:
            if self._terminal is not None:
                return
            snapshot = tuple(self._subscriptions.values())
        for subscription in snapshot:
            subscription._deliver_value(value)

    def complete(self, signal: TerminalSignal) -> bool:
        """Set the terminal signal and broadcast it. First caller wins.

        Returns True if this call terminated the Subject.
        """
        with self._lock:
            if self._terminal is not None:
                return False
            self._terminal = signal
            snapshot = tuple(self._subscriptions.values())
            self._subscriptions.clear()
            for subscription in snapshot:
                subscription._seal()
        logger.debug("{}: terminated with {} ({} subscribers)", self._name, signal, len(snapshot))
        for subscription in snapshot:
            subscription._deliver_terminal(signal)
        return True

    def cancel(self, subscription: Subscription[Any]) -> None:
        """Remove a subscription. Idempotent."""
        with self._lock:
            removed = self._subscriptions.pop(subscription.id, None)
            subscription._close()
        if removed is not None:
            logger.debug("{}: cancelled {}", self._name, subscription.id)

    def __repr__(self) -> str:
        return f"<Subject {self._name} subscribers={len(self._subscriptions)} terminal={self._terminal}>"
