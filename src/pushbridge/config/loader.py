"""Config loading: YAML file plus .env."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from pushbridge.core.errors import BridgeConfigurationError


def merge_layers(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge config layers left to right; later layers win.

    Nested mappings are merged key by key, anything else is replaced. None
    layers are skipped. Inputs are never mutated.
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            current = merged.get(key)
            if isinstance(current, Mapping) and isinstance(value, Mapping):
                merged[key] = merge_layers(current, value)
            elif isinstance(value, Mapping):
                merged[key] = merge_layers(value)
            else:
                merged[key] = value
    return merged


def load_config(path: str | Path) -> dict[str, Any]:
    """Read one YAML file with SafeLoader.

    A missing or empty file yields {}. Malformed YAML or a top level that is
    not a mapping raises BridgeConfigurationError.
    """
    path = Path(path)
    try:
        text = path.read_text()
    except FileNotFoundError:
        logger.warning("Config file not found: {}", path)
        return {}

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        mark = getattr(exc, "problem_mark", None)
        details: dict[str, Any] = {"path": str(path)}
        if mark is not None:
            details["line"] = mark.line + 1
            details["column"] = mark.column + 1
        raise BridgeConfigurationError(
            f"Config file {path} is not valid YAML",
            code="invalid_yaml",
            details=details,
            original_error=exc,
        ) from exc

    if data is None:
        logger.debug("Config file {} is empty", path)
        return {}
    if not isinstance(data, dict):
        raise BridgeConfigurationError(
            f"Config file {path} must contain a mapping, got {type(data).__name__}",
            code="invalid_config_structure",
            details={"path": str(path), "type": type(data).__name__},
        )
    logger.debug("Loaded {} top-level keys from {}", len(data), path)
    return data


def load_config_with_env(path: str | Path, defaults: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Load .env into the process environment, then the YAML file over defaults."""
    from dotenv import find_dotenv, load_dotenv

    load_dotenv(find_dotenv(usecwd=True))
    return merge_layers(defaults, load_config(path))
