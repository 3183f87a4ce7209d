"""config — packaged defaults for orderimports.

Every message template, default flag value, walker rule and exit code lives
in ``config/defaults.yaml``.  The file is read on first use and kept for the
rest of the process; ``get_str``, ``get_int`` and ``get_list`` look values up
by dotted key and check their type.
"""

from __future__ import annotations

from typing import Any

import yaml

from orderimports._paths import defaults_path

_DEFAULTS: dict[str, Any] | None = None


def load_defaults() -> dict[str, Any]:
    """Return the parsed defaults, reading ``defaults.yaml`` once.

    Raises:
        TypeError: If the file does not hold a mapping.
    """
    global _DEFAULTS  # noqa: PLW0603
    if _DEFAULTS is None:
        with open(defaults_path(), encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
        if not isinstance(data, dict):
            raise TypeError(
                f"defaults.yaml must be a YAML mapping, got {type(data).__name__}"
            )
        _DEFAULTS = data
    return _DEFAULTS


def get(dotted_key: str) -> Any:
    """Look up ``"messages.banner"``-style keys.

    Raises:
        KeyError: Naming the key and the first segment that is missing.
    """
    node: Any = load_defaults()
    for part in dotted_key.split("."):
        if not isinstance(node, dict) or part not in node:
            raise KeyError(
                f"Config key not found: {dotted_key!r} (missing segment: {part!r})"
            )
        node = node[part]
    return node


def _typed(dotted_key: str, kind: type, label: str) -> Any:
    value = get(dotted_key)
    # exit codes are ints; a YAML true/false must not pass for one
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise TypeError(f"Expected {label} for {dotted_key!r}, got {type(value).__name__}")
    return value


def get_str(dotted_key: str) -> str:
    return _typed(dotted_key, str, "str")


def get_int(dotted_key: str) -> int:
    return _typed(dotted_key, int, "int")


def get_list(dotted_key: str) -> list[Any]:
    return _typed(dotted_key, list, "list")


def reset() -> None:
    """Forget the cached defaults so the next lookup rereads the file."""
    global _DEFAULTS  # noqa: PLW0603
    _DEFAULTS = None
