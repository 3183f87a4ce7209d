"""yaml_loader — YAML loading for the theme and project config files.

Wraps PyYAML's ``safe_load`` behind a single entry point.  The project config
is user-supplied, so ``load_yaml_mapping`` converts every way it can be broken
(missing, unreadable, malformed, not a mapping) into a ``ConfigurationError``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional, Union

import yaml

from orderimports.exceptions import ConfigurationError


def load_yaml(path: Union[str, Path]) -> Optional[Any]:
    """Load a YAML file and return its parsed contents.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file contains invalid YAML.
    """
    with open(path, "r", encoding="utf-8") as fh:
        return yaml.safe_load(fh)


def load_yaml_mapping(path: Union[str, Path]) -> dict[str, Any]:
    """Load a YAML file that must contain a mapping.

    An empty file yields an empty mapping.

    Args:
        path: Path to the YAML file.

    Returns:
        The parsed mapping.

    Raises:
        ConfigurationError: If the file cannot be read, is not valid YAML,
            or does not hold a mapping.
    """
    try:
        data = load_yaml(path)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigurationError.invalid_file(str(path), [str(exc)]) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError.invalid_file(
            str(path), [f"expected a mapping, got {type(data).__name__}"]
        )
    return data
