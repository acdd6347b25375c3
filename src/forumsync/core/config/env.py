"""
Settings from .env files.

Only forumsync's own variables (see loader.SETTINGS_ENV_NAMES) are taken
from the files; anything else in them is left out of the process
environment. Files are applied highest precedence first and a variable is
never replaced once set:

    os.environ > project .env.local > project .env > user .env
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import dotenv_values

from .loader import SETTINGS_ENV_NAMES, get_xdg_config_home

logger = logging.getLogger(__name__)


def get_env_file_paths(project_dir: Path | None = None) -> list[Path]:
    """Return the .env files forumsync reads, highest precedence first."""
    if project_dir is None:
        project_dir = Path.cwd()
    return [
        project_dir / ".env.local",
        project_dir / ".env",
        get_xdg_config_home() / "forumsync" / ".env",
    ]


def load_layered_env(
    project_dir: Path | None = None,
    paths: list[Path] | None = None,
) -> list[str]:
    """
    Copy forumsync settings from .env files into os.environ.

    Args:
        project_dir: Directory holding the project .env files (defaults to cwd)
        paths: Explicit files, highest precedence first; replaces the defaults

    Returns:
        Names of the variables that were set, in the order they were set
    """
    if paths is None:
        paths = get_env_file_paths(project_dir)

    loaded: list[str] = []
    for path in paths:
        if not path.is_file():
            continue
        for name, value in dotenv_values(path).items():
            if value is None or name not in SETTINGS_ENV_NAMES or name in os.environ:
                continue
            os.environ[name] = value
            loaded.append(name)
            logger.debug("Loaded %s from %s", name, path)

    return loaded
