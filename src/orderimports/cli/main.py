"""orderimports CLI entry point — argument parsing and run dispatch.

Builds the argparse parser, merges command-line flags over the project
config file and the packaged defaults, runs the check and maps the verdict
onto the exit status.  Option defaults and messages are loaded from the
central config module so nothing is hardcoded.

Usage::

    orderimports [PATH ...] [--include-path REGEX] [--ignore-file REGEX]
                 [--local-root PREFIX] [--org-marker MARKER]
                 [--config FILE] [--format text|json] [--log-dir DIR]

Exit status: 0 when every checked file is in order, 1 when any file is out
of order or fails to parse, 2 on configuration or filesystem errors.
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from orderimports import __version__
from orderimports._paths import find_project_config
from orderimports.engine import check_paths
from orderimports.exceptions import ConfigurationError, OrderImportsError
from orderimports.lib import config
from orderimports.lib.models import ProjectConfig, TierRules, validate_project_config
from orderimports.lib.theme import colorize
from orderimports.lib.yaml_loader import load_yaml_mapping


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser with defaults taken from config."""
    prog = config.get_str("cli.prog_name")
    fmt_text = config.get_str("formats.text")
    fmt_json = config.get_str("formats.json")

    parser = argparse.ArgumentParser(
        prog=prog, description=config.get_str("cli.description")
    )
    parser.add_argument(
        "--version", action="version", version=f"{prog} {__version__}"
    )
    parser.add_argument(
        "paths", nargs="*", help="Root paths to scan (default: current directory)"
    )
    parser.add_argument(
        "--include-path",
        default=None,
        help="Only directories whose path matches this regex are checked",
    )
    parser.add_argument(
        "--ignore-file",
        default=None,
        help=(
            "Files matching this regex are ignored "
            f"(default: {config.get_str('defaults.ignore_file')})"
        ),
    )
    parser.add_argument(
        "--local-root",
        default=None,
        help=(
            "Import path prefix of this project "
            f"(default: {config.get_str('defaults.local_root')})"
        ),
    )
    parser.add_argument(
        "--org-marker",
        default=None,
        help=(
            "Substring of the first path segment marking org-wide imports "
            f"(default: {config.get_str('defaults.org_marker')})"
        ),
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Project config file (default: {config.get_str('defaults.project_config')} if present)",
    )
    parser.add_argument(
        "--format",
        choices=[fmt_text, fmt_json],
        default=None,
        help="Output format",
    )
    parser.add_argument(
        "--log-dir", default=None, help="Append a JSONL entry for the run here"
    )
    return parser


def load_project_config(path: Optional[str]) -> ProjectConfig:
    """Load and validate the project config, or return an empty one.

    Raises:
        ConfigurationError: If the file is unreadable or invalid.
    """
    found = find_project_config(path)
    if found is None:
        return ProjectConfig()
    data = load_yaml_mapping(found)
    errors = validate_project_config(data)
    if errors:
        raise ConfigurationError.invalid_file(str(found), errors)
    return ProjectConfig.from_dict(data)


def _first(*values: Optional[str]) -> str:
    for value in values:
        if value is not None:
            return value
    return ""


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, run the check and return the exit status."""
    args = build_parser().parse_args(argv)
    exit_ok = config.get_int("exit_codes.ok")
    exit_failed = config.get_int("exit_codes.failed")
    exit_error = config.get_int("exit_codes.error")

    try:
        project = load_project_config(args.config)
        rules = TierRules(
            local_root=_first(
                args.local_root, project.local_root, config.get_str("defaults.local_root")
            ),
            org_marker=_first(
                args.org_marker, project.org_marker, config.get_str("defaults.org_marker")
            ),
        )
        log_dir = _first(
            args.log_dir, project.logging.directory if project.logging.enabled else None
        )
        result = check_paths(
            args.paths,
            include_path=_first(
                args.include_path, project.include_path, config.get_str("defaults.include_path")
            ),
            ignore_file=_first(
                args.ignore_file, project.ignore_file, config.get_str("defaults.ignore_file")
            ),
            rules=rules,
            skip_dirs=project.skip_dirs,
            output_format=args.format or "",
            log_dir=log_dir,
        )
    except OrderImportsError as exc:
        prefix = config.get_str("messages.fatal_prefix")
        sys.stderr.write(colorize(f"{prefix}{exc}", "error", sys.stderr) + "\n")
        return exit_error

    return exit_failed if result.failed else exit_ok


def main() -> None:
    """Console-script entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
