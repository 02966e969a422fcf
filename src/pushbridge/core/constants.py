"""Source kinds and defaults."""

from __future__ import annotations

from typing import Literal

SourceKind = Literal["manual", "interval", "delayed_poll"]
SOURCE_KINDS: tuple[SourceKind, ...] = ("manual", "interval", "delayed_poll")

DEFAULT_SOURCE_KIND: SourceKind = "manual"
DEFAULT_INTERVAL_SECONDS = 1.0
DEFAULT_POLL_DELAY_SECONDS = 1.0
