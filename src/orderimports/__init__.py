"""orderimports — import grouping and ordering checker for Go sources.

Stable public API:
    check_paths: Walk root paths and check every Go file found.
    AnalysisSession: Per-run state for checking directories one at a time.
    check_imports: Compare one file's imports against the expected block.
    classify: Tier of a single import path.
    FileReport, RunResult, ImportRecord, Tier, TierRules: Result and input
        dataclasses.
    ConfigurationError, WalkError, ImportOrderParseError: Exceptions.
"""

__version__ = "0.1.0"

from orderimports.engine import AnalysisSession, check_paths
from orderimports.exceptions import (
    ConfigurationError,
    ImportOrderParseError,
    OrderImportsError,
    WalkError,
)
from orderimports.lib.models import FileReport, ImportRecord, RunResult, Tier, TierRules
from orderimports.lib.ordering import check_imports, classify

__all__ = [
    "__version__",
    "check_paths",
    "AnalysisSession",
    "check_imports",
    "classify",
    "FileReport",
    "ImportRecord",
    "RunResult",
    "Tier",
    "TierRules",
    "OrderImportsError",
    "ConfigurationError",
    "WalkError",
    "ImportOrderParseError",
]
