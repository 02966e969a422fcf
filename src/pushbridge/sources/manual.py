"""Programmatic push-source driven by explicit push/fail/finish calls."""

from __future__ import annotations

from typing import Any

from loguru import logger

from pushbridge.sources.base import PushSource


class ManualSource(PushSource):
    """Source whose events come from the code holding it.

    activate/deactivate are counted, not deduplicated. While inactive, pushes
    are dropped unless drop_when_inactive is False.
    """

    def __init__(self, *, drop_when_inactive: bool = True) -> None:
        super().__init__()
        self.drop_when_inactive = drop_when_inactive
        self.active = False
        self.activate_calls = 0
        self.deactivate_calls = 0

    @property
    def name(self) -> str:
        return "manual"

    def activate(self) -> None:
        self.activate_calls += 1
        self.active = True

    def deactivate(self) -> None:
        self.deactivate_calls += 1
        self.active = False

    def push(self, value: Any) -> bool:
        """Send one event. Returns False if it was dropped at the source."""
        if not self.active and self.drop_when_inactive:
            logger.debug("manual source inactive, dropping {!r}", value)
            return False
        self._emit(value)
        return True

    def fail(self, error: object) -> None:
        self._fail(error)

    def finish(self) -> None:
        self._finish()
