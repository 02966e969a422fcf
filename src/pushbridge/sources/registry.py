"""Source registry: maps a configured kind to a source factory."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from pushbridge.core.errors import BridgeConfigurationError, UnknownSourceError
from pushbridge.sources.base import PushSource

SourceFactory = Callable[..., PushSource]

_factories: dict[str, SourceFactory] = {}


@dataclass(frozen=True)
class SourceConfig:
    """Which source to build and the keyword options passed to its factory."""

    kind: str
    options: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> SourceConfig:
        """Build from a config mapping like {"kind": "interval", "interval_seconds": 2}."""
        if not isinstance(data, Mapping):
            raise BridgeConfigurationError(
                "source must be a mapping",
                code="invalid_source",
                details={"type": type(data).__name__},
            )
        kind = data.get("kind")
        if not kind or not isinstance(kind, str):
            raise BridgeConfigurationError(
                "source.kind is required",
                code="missing_source_kind",
                details={"source": dict(data)},
            )
        options = {k: v for k, v in data.items() if k != "kind"}
        nested = options.pop("options", None)
        if isinstance(nested, Mapping):
            options.update(nested)
        return cls(kind=kind, options=options)


def register_source(kind: str, factory: SourceFactory) -> None:
    """Register (or replace) the factory used for kind."""
    if kind in _factories:
        logger.debug("Replacing source factory for {}", kind)
    _factories[kind] = factory


def unregister_source(kind: str) -> None:
    _factories.pop(kind, None)


def registered_kinds() -> list[str]:
    return sorted(_factories)


def build_source(config: SourceConfig | Mapping[str, Any]) -> PushSource:
    """Construct the source described by config."""
    if not isinstance(config, SourceConfig):
        config = SourceConfig.from_dict(config)
    factory = _factories.get(config.kind)
    if factory is None:
        raise UnknownSourceError(
            f"unknown source kind {config.kind!r}",
            code="unknown_source",
            details={"kind": config.kind, "known": registered_kinds()},
        )
    try:
        return factory(**dict(config.options))
    except TypeError as exc:
        raise BridgeConfigurationError(
            f"invalid options for source {config.kind!r}: {exc}",
            code="invalid_source_options",
            details={"kind": config.kind, "options": dict(config.options)},
            original_error=exc,
        ) from exc
