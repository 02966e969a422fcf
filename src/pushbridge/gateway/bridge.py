"""Bridge: turns one push-source's callbacks into a shared Stream.

The Bridge is the source's only callback sink. Producer activation is an
explicit lifecycle call and is not tied to how many consumers are subscribed.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from loguru import logger

from pushbridge.events import completed, failed
from pushbridge.sources import PushSource, SourceConfig, build_source
from pushbridge.stream import Stream, Subject

T = TypeVar("T")


class Bridge(Generic[T]):
    """Owns a push-source and fans its events out to any number of consumers."""

    def __init__(self, source: PushSource) -> None:
        self._source = source
        self._subject: Subject[T] = Subject(name=f"bridge:{source.name}")
        self._stream: Stream[T] = Stream(self._subject)
        # Registered before anyone can call activate().
        source.register_sink(self)

    @classmethod
    def create(cls, source_config: SourceConfig | Mapping[str, Any]) -> Bridge[Any]:
        """Build the configured source and bind a new Bridge to it."""
        source = build_source(source_config)
        logger.info("Bridge created for {} source", source.name)
        return cls(source)

    @property
    def source(self) -> PushSource:
        return self._source

    @property
    def terminated(self) -> bool:
        return self._subject.terminated

    def activate(self) -> None:
        """Ask the source to start producing. Forwarded as-is, no dedup."""
        logger.debug("Activating {} source", self._source.name)
        self._source.activate()

    def deactivate(self) -> None:
        """Ask the source to stop. Events already in flight may still arrive."""
        logger.debug("Deactivating {} source", self._source.name)
        self._source.deactivate()

    def stream(self) -> Stream[T]:
        """Read-only view consumers subscribe to."""
        return self._stream

    # Callback sink, invoked by the source on any thread.

    def on_event(self, data: T) -> None:
        self._subject.emit(data)

    def on_error(self, err: object) -> None:
        signal = failed(err)
        if self._subject.complete(signal):
            logger.warning("{} source failed: {}", self._source.name, signal.error.payload)
        else:
            logger.debug("{} source error after termination ignored: {!r}", self._source.name, err)

    def on_complete(self) -> None:
        if self._subject.complete(completed()):
            logger.info("{} source completed", self._source.name)

    def __repr__(self) -> str:
        return f"<Bridge {self._source.name} terminated={self.terminated}>"
