# config_manager.py

import json
import logging
import os
import sys
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = os.path.join("config", "rain_config.json")

# Default configuration used if the config file does not exist
DEFAULT_CONFIG = {
    "width": 1280,
    "height": 720,
    "fps": 60,
    "fullscreen": False,
    "show_title": True,
    "show_panel": False,
    "log_level": "INFO",
    "playing": True,
    "speed": 2.0,
    "density": 1.0,
    "color": "green",
    "sound_enabled": False,
}


def get_project_root():
    """
    Directory the config folder is resolved against: the PyInstaller extraction
    folder when bundled, otherwise the current working directory.
    """
    return getattr(sys, "_MEIPASS", os.getcwd())


def load_config(default_config: Dict[str, Any], config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Attempts to load the configuration from a file.
    Returns the default configuration if the file does not exist or fails to load.

    Args:
        default_config: The baseline configuration dictionary.
        config_path: Explicit file to read instead of config/rain_config.json.

    Returns:
        The loaded and merged configuration dictionary.
    """
    if config_path is None:
        config_path = os.path.join(get_project_root(), CONFIG_FILE_NAME)

    config = default_config.copy()

    if not os.path.exists(config_path):
        # Configuration file not found, use default.
        return config

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            loaded_data = json.load(f)
    except json.JSONDecodeError as e:
        logger.warning("Malformed config file %s (%s), using defaults", config_path, e)
        return config
    except OSError as e:
        logger.warning("Could not read config file %s (%s), using defaults", config_path, e)
        return config

    if not isinstance(loaded_data, dict):
        logger.warning("Config file %s does not hold a JSON object, using defaults", config_path)
        return config

    # Merge: missing keys keep their defaults
    config.update(loaded_data)
    return config
