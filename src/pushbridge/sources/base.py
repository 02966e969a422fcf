"""Base push-source: one callback sink, explicit activate/deactivate."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Any, Protocol

from loguru import logger

from pushbridge.core.errors import SinkAlreadyRegisteredError


class CallbackSink(Protocol):
    """What a push-source calls. The Bridge is the only implementation in use."""

    def on_event(self, payload: Any) -> None:
        ...

    def on_error(self, error: object) -> None:
        ...


class PushSource(ABC):
    """Thin base for push-sources.

    Holds the single sink slot. Subclasses implement activate/deactivate and
    report through _emit/_fail/_finish, from whatever thread they run on.
    """

    def __init__(self) -> None:
        self._sink: CallbackSink | None = None
        self._sink_lock = threading.Lock()

    @property
    @abstractmethod
    def name(self) -> str:
        """Source identifier (e.g. 'manual', 'interval')."""
        ...

    @property
    def has_sink(self) -> bool:
        return self._sink is not None

    def register_sink(self, sink: CallbackSink) -> None:
        """Install the callback sink. A second registration is rejected."""
        with self._sink_lock:
            if self._sink is not None:
                raise SinkAlreadyRegisteredError(
                    f"{self.name} source already has a callback sink",
                    code="sink_already_registered",
                    details={"source": self.name},
                )
            self._sink = sink
        logger.debug("{} source: sink registered", self.name)

    @abstractmethod
    def activate(self) -> None:
        """Start producing."""
        ...

    @abstractmethod
    def deactivate(self) -> None:
        """Stop producing. Callbacks already in flight may still arrive."""
        ...

    def _emit(self, payload: Any) -> None:
        sink = self._sink
        if sink is None:
            logger.debug("{} source: no sink, dropping event", self.name)
            return
        sink.on_event(payload)

    def _fail(self, error: object) -> None:
        sink = self._sink
        if sink is None:
            logger.warning("{} source: no sink, dropping error {!r}", self.name, error)
            return
        sink.on_error(error)

    def _finish(self) -> None:
        on_complete = getattr(self._sink, "on_complete", None)
        if on_complete is not None:
            on_complete()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
