"""Utility modules for the row partition package.
"""

from .io_utils import get_settings_load_count, load_settings, reload_settings
from .logging_utils import get_logger, setup_logging, setup_logging_from_settings
from .path_utils import get_config_path, get_project_root

__all__ = [
    # Logging utilities
    "setup_logging",
    "setup_logging_from_settings",
    "get_logger",
    # Path utilities
    "get_project_root",
    "get_config_path",
    # Settings
    "load_settings",
    "reload_settings",
    "get_settings_load_count",
]
