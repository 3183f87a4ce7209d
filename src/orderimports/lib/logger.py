"""logger — JSONL run telemetry.

When a log directory is configured, each run appends a single JSON line to
a log file inside it.  An entry records the roots that were scanned, the
verdict, counts of directories, files, violations and parse errors, the
violating file paths, and the run duration.  The log file name and
formatting constants are read from ``config/defaults.yaml``.
"""

from __future__ import annotations

import datetime
import json
import os
from typing import Any, Sequence

from orderimports.lib import config
from orderimports.lib.models import RunResult


def log_run(
    log_dir: str,
    roots: Sequence[str],
    result: RunResult,
    run_ms: int,
) -> None:
    """Append a JSONL log entry describing a finished run.

    Args:
        log_dir: Directory to write the log file in.  Nothing is written
            when empty.
        roots: Root paths the run walked.
        result: The finished run.
        run_ms: Run duration in milliseconds.
    """
    if not log_dir:
        return
    os.makedirs(log_dir, exist_ok=True)
    log_path = os.path.join(log_dir, config.get_str("filenames.scan_log"))

    utc_src = config.get_str("formatting.utc_offset_source")
    utc_rep = config.get_str("formatting.utc_offset_replacement")
    separators = tuple(config.get_list("formatting.json_separators"))
    status_key = "statuses.failed" if result.failed else "statuses.passed"

    entry: dict[str, Any] = {
        "timestamp": (
            datetime.datetime.now(datetime.timezone.utc)
            .isoformat()
            .replace(utc_src, utc_rep)
        ),
        "event": "run",
        "roots": list(roots),
        "status": config.get_str(status_key),
        "dirs_checked": result.dirs_checked,
        "files_checked": result.files_checked,
        "violations": len(result.reports),
        "parse_errors": len(result.parse_errors),
        "violating_files": [r.path for r in result.reports],
        "run_ms": run_ms,
    }

    with open(log_path, "a", encoding="utf-8") as fh:
        fh.write(json.dumps(entry, separators=separators) + "\n")
