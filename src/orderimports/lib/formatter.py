"""formatter — diagnostic output for text and JSON modes.

Text mode writes one block per violating file, a header naming the file
followed by the diff, exactly as the analyzer finds them.  JSON mode
collects the whole run into a single document written at the end.
"""

from __future__ import annotations

from typing import Any, TextIO

from orderimports.lib import config
from orderimports.lib.models import FileReport, RunResult
from orderimports.lib.theme import colorize, colorize_diff


# ---------------------------------------------------------------------------
# Text formatting
# ---------------------------------------------------------------------------


def format_banner(stream: TextIO) -> str:
    """Return the line printed before any diagnostics, dimmed on a terminal."""
    return colorize(config.get_str("messages.banner"), "banner", stream)


def format_violation_text(report: FileReport, stream: TextIO) -> str:
    """Format one violating file as ``<path> (-got +want):`` plus its diff.

    Args:
        report: A failed file report.
        stream: Where the text will be written; colour is applied only
            when it is a terminal.

    Returns:
        The diagnostic block, ending with the diff's trailing newline.
    """
    header = config.get_str("messages.violation_header").format(path=report.path)
    return f"{colorize(header, 'file_path', stream)}\n{colorize_diff(report.diff, stream)}"


def format_parse_error_text(message: str, stream: TextIO) -> str:
    """Format a directory parse failure."""
    return colorize(message, "error", stream)


# ---------------------------------------------------------------------------
# JSON formatting
# ---------------------------------------------------------------------------


def format_report_json(report: FileReport) -> dict[str, Any]:
    """Return the JSON form of a single file report."""
    return {
        "file": report.path,
        "got": report.got,
        "want": report.want,
        "diff": report.diff,
    }


def format_run_json(result: RunResult) -> dict[str, Any]:
    """Format a finished run as a JSON-compatible dict.

    Args:
        result: The run outcome.

    Returns:
        Dict suitable for json.dumps().
    """
    status_key = "statuses.failed" if result.failed else "statuses.passed"
    return {
        "status": config.get_str(status_key),
        "violations": [format_report_json(r) for r in result.reports],
        "parse_errors": list(result.parse_errors),
        "summary": {
            "dirs_checked": result.dirs_checked,
            "files_checked": result.files_checked,
            "violations": len(result.reports),
            "parse_errors": len(result.parse_errors),
        },
    }
