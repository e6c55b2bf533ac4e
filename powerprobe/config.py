"""Configuration management for powerprobe."""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

log = logging.getLogger(__name__)

# Default configuration values
DEFAULTS = {
    # Where raw attributes come from
    "source": {
        "backend": "auto",  # auto, sysfs, udev, upower, psutil, none
        "sysfs_root": "/sys/class",
    },

    # What an acquisition scans
    "acquire": {
        "categories": ["battery", "ac_adapter", "thermal_zone", "fan"],
        "retain_unselected": False,  # Keep stale records of unrequested categories
    },

    # Report output
    "report": {
        "extended": False,  # Include capacity derivation intermediates
    },

    "logging": {
        "level": "WARNING",
    },
}


def get_config_dir() -> Path:
    """Get the configuration directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg_config:
        return Path(xdg_config) / "powerprobe"
    return Path.home() / ".config" / "powerprobe"


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    return get_config_dir() / "config.json"


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge override into base, returning new dict."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: Optional[Path] = None) -> dict:
    """Load configuration from file, merging with defaults.

    A missing file means defaults; an unreadable or malformed one is
    reported and ignored.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return copy.deepcopy(DEFAULTS)

    try:
        with open(config_path, "r") as f:
            user_config = json.load(f)
    except (json.JSONDecodeError, OSError) as e:
        log.warning("Could not load config from %s: %s", config_path, e)
        return copy.deepcopy(DEFAULTS)

    if not isinstance(user_config, dict):
        log.warning("Ignoring config %s: top level is not an object", config_path)
        return copy.deepcopy(DEFAULTS)

    return _deep_merge(copy.deepcopy(DEFAULTS), user_config)


def get(key: str, default: Any = None, config: Optional[dict] = None) -> Any:
    """Get a config value using dot notation (e.g., 'source.backend')."""
    value = config if config is not None else load_config()

    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default

    return value
