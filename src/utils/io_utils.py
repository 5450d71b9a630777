"""Settings loading for the row partition package."""

import copy
import functools
from typing import Any

import yaml

from src.utils.logging_utils import get_logger

logger = get_logger(__name__)

# Settings loading counter for debugging
_settings_load_count = 0

DEFAULTS: dict[str, Any] = {
    "partition": {
        "dropna": False,
        "row_id_column": None,
    },
    "logging": {
        "level": "INFO",
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        "file": None,
    },
}


def deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Merge ``update`` into ``base`` recursively, in place."""
    for key, value in update.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


@functools.lru_cache(maxsize=1)
def load_settings(path: str) -> dict[str, Any]:
    """Load settings from YAML file with defaults.

    This function is cached to prevent repeated file I/O and parsing.
    Use reload_settings() to force a fresh load.

    Args:
        path: Path to settings YAML file

    Returns:
        Dictionary with settings (user config merged over defaults)

    """
    global _settings_load_count
    _settings_load_count += 1

    logger.debug(f"Settings loaded (count: {_settings_load_count}) from {path}")

    defaults = copy.deepcopy(DEFAULTS)
    try:
        with open(path) as f:
            user_config = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning(f"Settings file not found: {path}. Using defaults.")
        return defaults
    except yaml.YAMLError as e:
        logger.exception(f"Error parsing settings: {e}. Using defaults.")
        return defaults

    if not isinstance(user_config, dict):
        logger.warning(f"Settings file {path} is not a mapping. Using defaults.")
        return defaults

    return deep_merge(defaults, user_config)


def reload_settings(path: str) -> dict[str, Any]:
    """Force reload settings from file (clears cache).

    Args:
        path: Path to settings YAML file

    Returns:
        Freshly loaded settings

    """
    load_settings.cache_clear()
    return load_settings(path)


def get_settings_load_count() -> int:
    """Get the total number of times settings have been loaded.

    Returns:
        Count of settings loads (for debugging)

    """
    return _settings_load_count
