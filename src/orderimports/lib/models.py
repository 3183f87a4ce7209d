"""Data models for orderimports: imports, tiers, reports and project config.

Typed dataclasses that replace raw dict and tuple access across the codebase.
Import records and tier rules are frozen; a file report is built once per
source file and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from orderimports.lib import config


# ---------------------------------------------------------------------------
# Imports and tiers
# ---------------------------------------------------------------------------


class Tier(str, Enum):
    """Import categories, declared in their required order."""

    STDLIB = "stdlib"
    EXTERNAL = "external"
    ORG = "org"
    LOCAL = "local"


@dataclass(frozen=True)
class ImportRecord:
    """One import spec declared in a Go source file.

    Attributes:
        path: Import path with its quotes stripped.
        line: 1-based line where the spec starts.
        end_line: 1-based line where the spec ends.
        index: Position of the spec in the file's import list.
    """

    path: str
    line: int
    end_line: int
    index: int


@dataclass(frozen=True)
class TierRules:
    """Strings that separate the org and local tiers from external imports.

    Attributes:
        local_root: Path prefix identifying this codebase's own packages.
        org_marker: Substring of the first path segment identifying the
            organization's shared packages.
    """

    local_root: str
    org_marker: str

    @classmethod
    def default(cls) -> TierRules:
        """Build from the packaged defaults."""
        return cls(
            local_root=config.get_str("defaults.local_root"),
            org_marker=config.get_str("defaults.org_marker"),
        )


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass
class FileReport:
    """Outcome of checking one source file.

    Attributes:
        path: Path of the checked file.
        got: Import block as declared, blank sentinels included.
        want: Expected import block.
        diff: Rendered diff between the two; empty when they agree.
    """

    path: str
    got: list[str]
    want: list[str]
    diff: str = ""

    @property
    def failed(self) -> bool:
        return bool(self.diff)


@dataclass
class RunResult:
    """Outcome of a whole run.

    Attributes:
        failed: The verdict.  Once True it stays True.
        dirs_checked: Directories handed to the analyzer.
        files_checked: Files that had two or more imports and were compared.
        reports: Reports for files whose imports are out of order.
        parse_errors: Messages for directories that failed to parse.
    """

    failed: bool = False
    dirs_checked: int = 0
    files_checked: int = 0
    reports: list[FileReport] = field(default_factory=list)
    parse_errors: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Project configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LoggingConfig:
    """Run telemetry settings from the project config."""

    enabled: bool = False
    directory: str = ""


@dataclass(frozen=True)
class ProjectConfig:
    """Settings from a ``.orderimports.yaml`` file.

    Unset fields are None so that command-line flags and packaged defaults
    can fill them in later.
    """

    include_path: Optional[str] = None
    ignore_file: Optional[str] = None
    local_root: Optional[str] = None
    org_marker: Optional[str] = None
    skip_dirs: Optional[list[str]] = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProjectConfig:
        """Build from a parsed YAML mapping that passed validation."""
        log_raw = data.get("logging") or {}
        return cls(
            include_path=data.get("include_path"),
            ignore_file=data.get("ignore_file"),
            local_root=data.get("local_root"),
            org_marker=data.get("org_marker"),
            skip_dirs=data.get("skip_dirs"),
            logging=LoggingConfig(
                enabled=bool(log_raw.get("enabled", False)),
                directory=log_raw.get("directory") or "",
            ),
        )


_STRING_KEYS = ("include_path", "ignore_file", "local_root", "org_marker")


def validate_project_config(data: Any) -> list[str]:
    """Validate the structure of a project config mapping.

    Args:
        data: The parsed YAML content.

    Returns:
        List of validation error messages. Empty if valid.
    """
    errors: list[str] = []

    if not isinstance(data, dict):
        errors.append(f"Project config must be a mapping, got {type(data).__name__}")
        return errors

    for key in _STRING_KEYS:
        val = data.get(key)
        if val is not None and not isinstance(val, str):
            errors.append(f"'{key}' must be a string, got {type(val).__name__}")

    skip_dirs = data.get("skip_dirs")
    if skip_dirs is not None:
        if not isinstance(skip_dirs, list):
            errors.append(
                f"'skip_dirs' must be a list, got {type(skip_dirs).__name__}"
            )
        elif not all(isinstance(d, str) for d in skip_dirs):
            errors.append("'skip_dirs' entries must be strings")

    log_cfg = data.get("logging")
    if log_cfg is not None:
        if not isinstance(log_cfg, dict):
            errors.append(
                f"'logging' must be a mapping, got {type(log_cfg).__name__}"
            )
        else:
            directory = log_cfg.get("directory")
            if directory is not None and not isinstance(directory, str):
                errors.append(
                    f"logging.directory must be a string, "
                    f"got {type(directory).__name__}"
                )

    known = set(_STRING_KEYS) | {"skip_dirs", "logging"}
    for key in data:
        if key not in known:
            errors.append(f"Unknown key: {key!r}")

    return errors
