"""Push-sources. Each implements PushSource (register_sink, activate, deactivate)."""

from pushbridge.sources.base import CallbackSink, PushSource
from pushbridge.sources.delayed import DelayedPollSource
from pushbridge.sources.interval import IntervalSource
from pushbridge.sources.manual import ManualSource
from pushbridge.sources.registry import (
    SourceConfig,
    build_source,
    register_source,
    registered_kinds,
    unregister_source,
)

register_source("manual", ManualSource)
register_source("interval", IntervalSource)
register_source("delayed_poll", DelayedPollSource)

__all__ = [
    "CallbackSink",
    "DelayedPollSource",
    "IntervalSource",
    "ManualSource",
    "PushSource",
    "SourceConfig",
    "build_source",
    "register_source",
    "registered_kinds",
    "unregister_source",
]
