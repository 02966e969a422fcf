"""Configuration: YAML + env overlay."""

from pushbridge.config.loader import load_config, load_config_with_env, merge_layers
from pushbridge.config.schema import Config, cfg

__all__ = ["Config", "cfg", "load_config", "load_config_with_env", "merge_layers"]
