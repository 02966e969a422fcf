"""Config schema and accessor."""

from __future__ import annotations

import os
from typing import Any

from loguru import logger

from pushbridge.core.constants import DEFAULT_SOURCE_KIND
from pushbridge.core.errors import BridgeConfigurationError
from pushbridge.sources import SourceConfig

# Env keys that override config (loaded once per reload)
_ENV_OVERRIDE_KEYS = (
    "PUSHBRIDGE_SOURCE_KIND",
    "PUSHBRIDGE_LOG_LEVEL",
)

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


def _load_env_overrides() -> dict[str, str]:
    return {k: os.environ.get(k, "") for k in _ENV_OVERRIDE_KEYS}


class Config:
    """Config accessor with attribute-style access for nested keys."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data = data or {}
        self._env: dict[str, str] = _load_env_overrides()

    def reload(self, data: dict[str, Any], *, validate: bool = True) -> None:
        """Replace config data."""
        self._data = data or {}
        self._env = _load_env_overrides()
        if validate:
            self._validate()
        logger.debug("Config reloaded: {} source", self.source.kind)

    def _validate(self) -> None:
        """Validate config structure; raise BridgeConfigurationError on failure."""
        source = self._data.get("source")
        if source is not None and not isinstance(source, dict):
            raise BridgeConfigurationError(
                "source must be a mapping",
                code="invalid_source",
                details={"type": type(source).__name__},
            )
        level = self.log_level
        if level not in _LOG_LEVELS:
            raise BridgeConfigurationError(
                f"log_level must be one of {', '.join(_LOG_LEVELS)}",
                code="invalid_log_level",
                details={"log_level": level},
            )
        seconds = self._data.get("run_seconds")
        if seconds is not None:
            try:
                ok = float(seconds) > 0
            except (TypeError, ValueError):
                ok = False
            if not ok:
                raise BridgeConfigurationError(
                    "run_seconds must be a positive number",
                    code="invalid_run_seconds",
                    details={"run_seconds": seconds},
                )

    @property
    def raw(self) -> dict[str, Any]:
        return self._data

    def get(self, key: str, default: Any = None) -> Any:
        """Get value by dot-separated path."""
        parts = key.split(".")
        obj: Any = self._data
        for part in parts:
            if isinstance(obj, dict) and part in obj:
                obj = obj[part]
            else:
                return default
        return obj

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __contains__(self, key: str) -> bool:
        return key in self._data

    @property
    def source(self) -> SourceConfig:
        """Source section; PUSHBRIDGE_SOURCE_KIND overrides its kind."""
        data = self._data.get("source")
        section = dict(data) if isinstance(data, dict) else {}
        env_kind = self._env.get("PUSHBRIDGE_SOURCE_KIND", "").strip()
        if env_kind:
            section["kind"] = env_kind
        section.setdefault("kind", DEFAULT_SOURCE_KIND)
        return SourceConfig.from_dict(section)

    @property
    def log_level(self) -> str:
        env_val = self._env.get("PUSHBRIDGE_LOG_LEVEL", "").strip()
        if env_val:
            return env_val.upper()
        return str(self._data.get("log_level", "INFO")).upper()

    @property
    def run_seconds(self) -> float | None:
        val = self._data.get("run_seconds")
        if val is None:
            return None
        return float(val)


cfg: Config = Config({})
