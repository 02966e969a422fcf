"""Poll an externally driven state once, after a fixed delay.

Best effort only: the delay is a guess at when the outside change has
settled, nothing more. The result is emitted as a single event.
"""

from __future__ import annotations

import importlib
import threading
from collections.abc import Callable
from typing import Any

from loguru import logger

from pushbridge.core.constants import DEFAULT_POLL_DELAY_SECONDS
from pushbridge.core.errors import BridgeConfigurationError
from pushbridge.sources.base import PushSource


def resolve_probe(ref: str | Callable[[], Any]) -> Callable[[], Any]:
    """Accept a callable or a "package.module:attribute" reference."""
    if callable(ref):
        return ref
    module_name, sep, attr = str(ref).partition(":")
    if not sep or not module_name or not attr:
        raise BridgeConfigurationError(
            f"probe must look like 'module:attribute', got {ref!r}",
            code="invalid_probe",
            details={"probe": ref},
        )
    try:
        target: Any = importlib.import_module(module_name)
        for part in attr.split("."):
            target = getattr(target, part)
    except (ImportError, AttributeError) as exc:
        raise BridgeConfigurationError(
            f"cannot resolve probe {ref!r}",
            code="invalid_probe",
            details={"probe": ref},
            original_error=exc,
        ) from exc
    if not callable(target):
        raise BridgeConfigurationError(
            f"probe {ref!r} is not callable",
            code="invalid_probe",
            details={"probe": ref},
        )
    return target


class DelayedPollSource(PushSource):
    """Calls probe() delay_seconds after activate() and emits the result.

    A probe exception is reported through on_error. With complete_after_poll
    the stream is finished once the value has been emitted.
    """

    def __init__(
        self,
        *,
        probe: str | Callable[[], Any],
        delay_seconds: float = DEFAULT_POLL_DELAY_SECONDS,
        complete_after_poll: bool = True,
    ) -> None:
        super().__init__()
        if delay_seconds < 0:
            raise BridgeConfigurationError(
                "delay_seconds must not be negative",
                code="invalid_delay",
                details={"delay_seconds": delay_seconds},
            )
        self.probe = resolve_probe(probe)
        self.delay_seconds = float(delay_seconds)
        self.complete_after_poll = complete_after_poll
        self._timer: threading.Timer | None = None

    @property
    def name(self) -> str:
        return "delayed_poll"

    def activate(self) -> None:
        timer = threading.Timer(self.delay_seconds, self._poll)
        timer.daemon = True
        self._timer = timer
        timer.start()
        logger.debug("delayed poll scheduled in {}s", self.delay_seconds)

    def deactivate(self) -> None:
        timer = self._timer
        if timer is not None:
            timer.cancel()

    def join(self, timeout: float | None = None) -> None:
        timer = self._timer
        if timer is not None and timer is not threading.current_thread():
            timer.join(timeout)

    def _poll(self) -> None:
        try:
            value = self.probe()
        except Exception as exc:
            logger.warning("delayed poll probe failed: {}", exc)
            self._fail(exc)
            return
        self._emit(value)
        if self.complete_after_poll:
            self._finish()
