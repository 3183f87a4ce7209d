"""Centralized path resolution for the orderimports package.

This is the ONLY module that touches __file__ or computes package-relative
paths.  Project config discovery also lives here so that the CLI and the
programmatic API agree on where ``.orderimports.yaml`` is looked up.

Environment variables:
    ORDERIMPORTS_CONFIG — Path to a project config file.  Used when no
        ``--config`` flag is given; takes precedence over the file in the
        current working directory.
"""

import os
from pathlib import Path
from typing import Optional

_PACKAGE_DIR = Path(__file__).resolve().parent


def config_dir() -> Path:
    """Return the packaged config/ directory path."""
    return _PACKAGE_DIR / "config"


def defaults_path() -> Path:
    """Return the path to config/defaults.yaml."""
    return config_dir() / "defaults.yaml"


def theme_path() -> Path:
    """Return the path to config/theme.yaml."""
    from orderimports.lib.config import get_str

    return config_dir() / get_str("filenames.theme")


def find_project_config(explicit: Optional[str] = None) -> Optional[Path]:
    """Locate the project config file, if any.

    Args:
        explicit: Path given on the command line.  Returned as-is even if it
            does not exist so the caller reports the missing file.

    Returns:
        Path to the project config, or None when none is configured.
    """
    from orderimports.lib.config import get_str

    if explicit:
        return Path(explicit)
    env = os.environ.get(get_str("env_vars.project_config"))
    if env:
        return Path(env)
    candidate = Path.cwd() / get_str("defaults.project_config")
    if candidate.is_file():
        return candidate
    return None
