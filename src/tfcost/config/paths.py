"""Config path resolution for the two-tier config system."""

from pathlib import Path
from typing import Optional

CONFIG_DIR_NAME = ".tfcost"
CONFIG_FILE_NAME = "config.yaml"


def get_defaults_path() -> Path:
    """Get packaged defaults: tfcost/config/defaults.yaml"""
    return Path(__file__).parent / "defaults.yaml"


def get_user_config_path() -> Path:
    """Get user config path: ~/.tfcost/config.yaml"""
    return Path.home() / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def get_project_config_path() -> Optional[Path]:
    """Get project config path: .tfcost/config.yaml (from current working directory)"""
    project_config = Path.cwd() / CONFIG_DIR_NAME / CONFIG_FILE_NAME
    if project_config.exists():
        return project_config
    return None
