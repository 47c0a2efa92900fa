"""Layered configuration manager (defaults + user + project override)."""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional
from .paths import get_defaults_path, get_user_config_path, get_project_config_path
from ..pricing.catalog import PricingCatalog, merge_pricing_overrides
from ..utils.errors import ConfigError
from ..utils.logging import get_logger

logger = get_logger("config.manager")


def _read_yaml(path: Path) -> Dict[str, Any]:
    """Read a YAML mapping from path. Empty files yield {}."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in config file {path}: {e}")
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must contain a dictionary: {path}")
    return data


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load the full config tree.

    Packaged defaults are always loaded first. With an explicit config_path
    that file is merged on top; otherwise the user config and then the
    project config are merged in turn.

    Args:
        config_path: Optional explicit config file

    Returns:
        Configuration dictionary

    Raises:
        ConfigError: If a config file is missing, unreadable or not a YAML mapping
    """
    config = _read_yaml(get_defaults_path())

    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        _deep_merge(config, _read_yaml(path))
        logger.info(f"Loaded config from {path}")
        return config

    user_config_path = get_user_config_path()
    if user_config_path.exists():
        _deep_merge(config, _read_yaml(user_config_path))
        logger.debug(f"Loaded user config from {user_config_path}")

    project_config_path = get_project_config_path()
    if project_config_path:
        _deep_merge(config, _read_yaml(project_config_path))
        logger.info(f"Loaded project config from {project_config_path}")

    return config


def _validate_pricing_overrides(overrides: Any) -> None:
    """Check overrides are nested mappings ending in non-negative prices."""
    if not isinstance(overrides, dict):
        raise ConfigError("pricing.overrides must be a mapping")

    for provider, tables in overrides.items():
        if tables is None:
            continue
        if not isinstance(tables, dict):
            raise ConfigError(f"pricing.overrides.{provider} must be a mapping of resource types")
        for resource_type, entries in tables.items():
            if entries is None:
                continue
            if not isinstance(entries, dict):
                raise ConfigError(f"pricing.overrides.{provider}.{resource_type} must be a mapping")
            for key, prices in entries.items():
                where = f"pricing.overrides.{provider}.{resource_type}.{key}"
                if not isinstance(prices, dict) or not prices:
                    raise ConfigError(f"{where} must be a mapping of prices, e.g. {{monthly: 7.5}}")
                for field, value in prices.items():
                    if isinstance(value, bool) or not isinstance(value, (int, float)):
                        raise ConfigError(f"{where}.{field} must be a number, got {value!r}")
                    if value < 0:
                        raise ConfigError(f"{where}.{field} must not be negative")


def get_pricing_catalog(config: Optional[Dict[str, Any]] = None) -> PricingCatalog:
    """
    Return the built-in pricing catalog with config overrides applied.

    Args:
        config: Optional config dict (if None, loads from file)

    Raises:
        ConfigError: If an override is not provider -> resource_type -> key -> prices
    """
    if config is None:
        config = load_config()

    overrides = (config.get("pricing") or {}).get("overrides") or {}
    _validate_pricing_overrides(overrides)
    if overrides:
        logger.debug(f"Applying pricing overrides for providers: {sorted(overrides)}")
    return merge_pricing_overrides(overrides)


def get_state_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the state subsection from loaded config."""
    if config is None:
        config = load_config()
    return config.get("state") or {}


def get_ascii_mode(config: Optional[Dict[str, Any]] = None) -> Optional[bool]:
    """Return output.ascii, or None when unset so the environment decides."""
    if config is None:
        config = load_config()
    value = (config.get("output") or {}).get("ascii")
    return None if value is None else bool(value)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Deep merge override into base (mutates base)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
