"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from .models import ForumSyncConfig

logger = logging.getLogger(__name__)

# Global cache to avoid reloading config multiple times per process
_config_cache: ForumSyncConfig | None = None

# Environment variable -> (section, key)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "DISCORD_BOT_TOKEN": ("discord", "bot_token"),
    "DISCORD_FORUM_CHANNEL_ID": ("discord", "forum_channel_id"),
    "DISCORD_DELAY_MENTION_USER_ID": ("discord", "delay_mention_user_id"),
    "SPREADSHEET_ID": ("source", "spreadsheet_id"),
    "GOOGLE_ACCESS_TOKEN": ("source", "access_token"),
    "FORUMSYNC_SHEET_NAME": ("source", "sheet_name"),
    "FORUMSYNC_CSV_PATH": ("source", "csv_path"),
    "FORUMSYNC_SOURCE": ("source", "kind"),
    "FORUMSYNC_TIMEZONE": ("sync", "timezone"),
    "API_KEY": ("server", "api_key"),
}

# Every variable forumsync reads from the environment
SETTINGS_ENV_NAMES: frozenset[str] = frozenset(ENV_OVERRIDES) | {
    "FORUMSYNC_ENV",
    "FORUMSYNC_MAX_CONCURRENCY",
    "PORT",
}


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """Path to ~/.config/forumsync/config.json (or XDG equivalent)."""
    return get_xdg_config_home() / "forumsync" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """Path to .forumsync.json in the given (or current) directory."""
    if cwd is None:
        cwd = Path.cwd()
    return cwd / ".forumsync.json"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`; nested dicts
    are merged, not replaced.

    Example:
        >>> deep_merge({"a": 1, "b": {"x": 10}}, {"b": {"y": 20}})
        {'a': 1, 'b': {'x': 10, 'y': 20}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            return None
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Failed to parse config at %s: %s", path, e)
        return None


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Env vars have the highest precedence. Besides the plain string settings
    in ENV_OVERRIDES:
        FORUMSYNC_ENV=production - sets server.production
        FORUMSYNC_MAX_CONCURRENCY - overrides sync.max_concurrency
    """
    result = deep_merge({}, config_dict)

    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            result.setdefault(section, {})[key] = value

    if env_mode := os.environ.get("FORUMSYNC_ENV"):
        result.setdefault("server", {})["production"] = env_mode.lower() == "production"

    if concurrency_str := os.environ.get("FORUMSYNC_MAX_CONCURRENCY"):
        try:
            concurrency = int(concurrency_str)
        except ValueError:
            logger.warning(
                "Invalid FORUMSYNC_MAX_CONCURRENCY value '%s', ignoring", concurrency_str
            )
        else:
            result.setdefault("sync", {})["max_concurrency"] = concurrency

    return result


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> ForumSyncConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables
        2. Project config (.forumsync.json)
        3. User config (~/.config/forumsync/config.json)
        4. Model defaults

    Args:
        project_dir: Directory to load .forumsync.json from (defaults to cwd)
        use_cache: If True, return cached config from a previous load

    Returns:
        Validated ForumSyncConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged: dict[str, Any] = {}

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged = deep_merge(merged, project_config)

    merged = apply_env_overrides(merged)

    config = ForumSyncConfig(**merged)
    _config_cache = config
    return config


def clear_cache() -> None:
    """Clear the configuration cache, forcing the next load to re-read."""
    global _config_cache
    _config_cache = None
