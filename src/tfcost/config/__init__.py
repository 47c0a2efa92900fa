"""Configuration module: layered YAML settings and pricing overrides."""

from .manager import load_config, get_pricing_catalog, get_state_config, get_ascii_mode
from .paths import get_defaults_path, get_user_config_path, get_project_config_path

__all__ = [
    "load_config",
    "get_pricing_catalog",
    "get_state_config",
    "get_ascii_mode",
    "get_defaults_path",
    "get_user_config_path",
    "get_project_config_path",
]
