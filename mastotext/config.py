"""Configuration management for mastotext."""

import copy
import json
import os
from pathlib import Path
from typing import Any

# Application name for XDG paths
APP_NAME = "mastotext"

# Default configuration
DEFAULT_CONFIG: dict[str, Any] = {
    "render": {
        "format": "markdown",  # markdown or text
        "internal_links": True,  # link tags/mentions to mastodonandon:// URLs
        "invalid_url_text": "<<invalid url>>",
    },
    "emoji": {
        # JSON list of custom emoji (the /api/v1/custom_emojis payload)
        "table_path": None,
    },
}


def get_xdg_config_home() -> Path:
    """Get XDG config home directory."""
    return Path(os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config")))


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_xdg_config_home() / APP_NAME / "config.json"


def load_config() -> dict[str, Any]:
    """Load configuration, merging with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_path = get_config_path()

    if config_path.exists():
        with open(config_path) as f:
            user_config = json.load(f)
            config = deep_merge(config, user_config)

    return config


def save_config(config: dict[str, Any]) -> None:
    """Save configuration to file."""
    config_path = get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        json.dump(config, f, indent=2)


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dictionaries."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def get_emoji_table_path() -> Path | None:
    """
    Get the custom emoji table path.

    Priority:
    1. MASTOTEXT_EMOJI_FILE environment variable
    2. emoji.table_path in config.json
    """
    env_path = os.environ.get("MASTOTEXT_EMOJI_FILE")
    if env_path:
        return Path(env_path)

    config = load_config()
    config_path = config.get("emoji", {}).get("table_path")
    if config_path:
        return Path(config_path).expanduser()

    return None
