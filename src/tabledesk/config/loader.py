from pathlib import Path
from typing import Any, Dict

import yaml

DEFAULT_CONFIG_PATH = Path("tabledesk.config.yaml")
DEFAULT_SQLITE_PATH = "tabledesk.db"


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """
    Load tabledesk configuration from YAML file.

    Args:
        path: Optional path to config file. Defaults to tabledesk.config.yaml

    Returns:
        Dictionary with configuration (empty file gives an empty dict)

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is not a mapping
    """
    cfg_path = path or DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config file not found: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError("Config must be a dictionary")

    storage = config.get("storage", {})
    if not isinstance(storage, dict):
        raise ValueError("Config 'storage' must be a dictionary")

    return config


def get_sqlite_path(config: Dict[str, Any] | None = None) -> str:
    if not config:
        return DEFAULT_SQLITE_PATH
    return config.get("storage", {}).get("sqlite_path") or DEFAULT_SQLITE_PATH
