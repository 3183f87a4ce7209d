"""theme — ANSI colouring for diagnostics written to a terminal.

Colour definitions are read lazily from ``config/theme.yaml`` and cached.
Nothing is coloured unless the target stream is a TTY, so output captured
by CI logs, pipes or tests stays byte-for-byte plain.
"""

from __future__ import annotations

from typing import Any, Optional, TextIO

from orderimports._paths import theme_path
from orderimports.lib.yaml_loader import load_yaml


class Theme:
    """Role-to-ANSI-code mapping loaded from theme.yaml on first use."""

    def __init__(self) -> None:
        self._resolved: Optional[dict[str, str]] = None

    def _load(self) -> dict[str, str]:
        tp = theme_path()
        if not tp.is_file():
            return {}
        raw: Any = load_yaml(tp) or {}
        ansi: dict[str, str] = raw.get("ansi", {})
        resolved = {
            role: ansi.get(colour, "") for role, colour in raw.get("roles", {}).items()
        }
        resolved["reset"] = ansi.get("reset", "")
        return resolved

    @property
    def resolved(self) -> dict[str, str]:
        if self._resolved is None:
            self._resolved = self._load()
        return self._resolved

    def colorize(self, text: str, role: str, stream: TextIO) -> str:
        """Wrap text in the role's colour when ``stream`` is a terminal."""
        isatty = getattr(stream, "isatty", None)
        if isatty is None or not isatty():
            return text
        code = self.resolved.get(role, "")
        if not code:
            return text
        return f"{code}{text}{self.resolved.get('reset', '')}"


_theme = Theme()


def colorize(text: str, role: str, stream: TextIO) -> str:
    """Colour text using the shared theme."""
    return _theme.colorize(text, role, stream)


def colorize_diff(diff: str, stream: TextIO) -> str:
    """Colour the removed, added and hunk-header lines of a unified diff."""
    out: list[str] = []
    for line in diff.splitlines(keepends=True):
        body = line.rstrip("\n")
        if body.startswith(("---", "+++")):
            role = "file_path"
        elif body.startswith("@@"):
            role = "hunk"
        elif body.startswith("-"):
            role = "removed"
        elif body.startswith("+"):
            role = "added"
        else:
            out.append(line)
            continue
        out.append(colorize(body, role, stream) + line[len(body):])
    return "".join(out)
