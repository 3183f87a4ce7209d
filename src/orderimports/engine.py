"""orderimports engine — the analysis session and the programmatic entry point.

An ``AnalysisSession`` is created once per run.  It owns everything the run
shares between directories: the generated-file pattern, the tier rules, the
Go parser and the verdict.  Directories are analyzed one at a time in the
order they are given; diagnostics are written as soon as they are found
(text mode) or once at the end (JSON mode).

Design notes:
    A parse failure or an out-of-order file flips the verdict to failed and
    the run carries on, so one bad file never hides violations elsewhere.
    Configuration problems raise ``ConfigurationError`` before any
    directory is touched.
"""

from __future__ import annotations

import json
import sys
import time
from typing import Optional, Sequence, TextIO

from orderimports.exceptions import ImportOrderParseError
from orderimports.lib import config
from orderimports.lib.formatter import (
    format_banner,
    format_parse_error_text,
    format_run_json,
    format_violation_text,
)
from orderimports.lib.logger import log_run
from orderimports.lib.models import FileReport, RunResult, TierRules
from orderimports.lib.ordering import check_imports
from orderimports.lib.parser import GoParser, ParsedFile
from orderimports.lib.walker import collect_dirs, compile_pattern


class AnalysisSession:
    """State of one import-order check run.

    Attributes:
        ignore_file: Compiled pattern for generated files to skip.
        rules: Local root and org marker used for classification.
        parser: Go parser shared by every file of the run.
        result: Verdict, counters and collected reports.
    """

    def __init__(
        self,
        ignore_file: Optional[str] = None,
        rules: Optional[TierRules] = None,
        *,
        output_format: str = "",
        stream: Optional[TextIO] = None,
    ) -> None:
        """Initialize a session.

        Args:
            ignore_file: Regex for files to exclude.  Defaults to the
                configured generated-file marker.
            rules: Tier rules.  Defaults to the configured strings.
            output_format: 'text' or 'json'.  Defaults to the value from
                config.
            stream: Where diagnostics go.  Defaults to stdout.

        Raises:
            ConfigurationError: If ``ignore_file`` is not a valid regex.
        """
        if ignore_file is None:
            ignore_file = config.get_str("defaults.ignore_file")
        self.ignore_file = compile_pattern(ignore_file, "messages.bad_ignore_regex")
        self.rules = rules or TierRules.default()
        self.parser = GoParser()
        self.output_format = output_format or config.get_str("formats.default")
        self.stream = stream or sys.stdout
        self.result = RunResult()

    @property
    def failed(self) -> bool:
        return self.result.failed

    @property
    def _text_mode(self) -> bool:
        return self.output_format != config.get_str("formats.json")

    def _emit(self, text: str) -> None:
        if self._text_mode:
            self.stream.write(text)

    def filter_files(self, files: Sequence[ParsedFile]) -> list[ParsedFile]:
        """Drop files whose path matches the generated-file pattern."""
        return [f for f in files if not self.ignore_file.search(f.path)]

    def analyze_directory(self, directory: str) -> list[FileReport]:
        """Check the import order of every Go file in one directory.

        Args:
            directory: Directory whose ``*.go`` files are checked.

        Returns:
            Reports for the files whose imports are out of order.
        """
        self.result.dirs_checked += 1
        try:
            files = self.parser.parse_dir(directory)
        except ImportOrderParseError as exc:
            self.result.failed = True
            self.result.parse_errors.append(str(exc))
            self._emit(format_parse_error_text(str(exc), self.stream) + "\n")
            return []

        violations: list[FileReport] = []
        for parsed in self.filter_files(files):
            # ordering is vacuous with fewer than two imports
            if len(parsed.imports) <= 1:
                continue
            self.result.files_checked += 1
            report = check_imports(parsed.path, parsed.imports, self.rules)
            if report.failed:
                self.result.failed = True
                violations.append(report)
                self._emit(format_violation_text(report, self.stream))
        self.result.reports.extend(violations)
        return violations

    def run(self, dirs: Sequence[str]) -> RunResult:
        """Analyze directories in order and return the accumulated result."""
        self._emit(format_banner(self.stream) + "\n")
        for directory in dirs:
            self.analyze_directory(directory)
        if not self._text_mode:
            indent = config.get_int("formatting.json_indent")
            self.stream.write(json.dumps(format_run_json(self.result), indent=indent) + "\n")
        return self.result


def check_paths(
    roots: Sequence[str] = (),
    *,
    include_path: str = "",
    ignore_file: Optional[str] = None,
    rules: Optional[TierRules] = None,
    skip_dirs: Optional[Sequence[str]] = None,
    output_format: str = "",
    stream: Optional[TextIO] = None,
    log_dir: str = "",
) -> RunResult:
    """Walk the roots and check the import order of every Go file found.

    This is the primary entry point for programmatic usage.

    Args:
        roots: Paths to walk.  Defaults to the current directory.
        include_path: Only directories whose path matches are checked.
        ignore_file: Files whose path matches are skipped.
        rules: Tier rules.  Defaults to the configured strings.
        skip_dirs: Directory names never entered.
        output_format: 'text' or 'json'.
        stream: Where diagnostics go.  Defaults to stdout.
        log_dir: When set, a JSONL entry for the run is appended there.

    Returns:
        RunResult with the verdict and the violating files.

    Raises:
        ConfigurationError: If a regex option is invalid.
        WalkError: If the filesystem walk fails.
    """
    start = time.time()
    roots = list(roots) or config.get_list("defaults.roots")
    session = AnalysisSession(
        ignore_file, rules, output_format=output_format, stream=stream
    )
    dirs = collect_dirs(roots, include_path, skip_dirs)
    result = session.run(dirs)
    log_run(log_dir, roots, result, int((time.time() - start) * 1000))
    return result
