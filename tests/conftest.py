"""Shared fixtures for the orderimports test suite."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Sequence

import pytest

from orderimports.lib.models import ImportRecord, TierRules


FIXTURES_DIR = Path(__file__).parent / "fixtures"
PASSING_DIR = FIXTURES_DIR / "passing"
FAILING_DIR = FIXTURES_DIR / "failing"
EDGE_CASES_DIR = FIXTURES_DIR / "edge_cases"


def go_source(*groups: Sequence[str], package: str = "sample") -> str:
    """Build a Go file whose import block holds the given groups.

    Groups are separated by one blank line.  Each entry is written verbatim
    inside the parentheses, so aliases can be included (``'v1 "k8s.io/api"'``);
    bare paths are quoted.
    """
    lines = [f"package {package}", "", "import ("]
    for i, group in enumerate(groups):
        if i:
            lines.append("")
        for entry in group:
            spec = entry if '"' in entry or "`" in entry else f'"{entry}"'
            lines.append(f"\t{spec}")
    lines += [")", "", "func Use() {}", ""]
    return "\n".join(lines)


def records_from_block(block: Sequence[str]) -> list[ImportRecord]:
    """Lay out an import block one spec per line, blank entries as gaps."""
    records: list[ImportRecord] = []
    line = 4
    for entry in block:
        if entry == "":
            line += 1
            continue
        records.append(ImportRecord(path=entry, line=line, end_line=line, index=len(records)))
        line += 1
    return records


@pytest.fixture()
def rules() -> TierRules:
    """Return the default tier rules (k8s.io/kubernetes local, k8s.io org)."""
    return TierRules(local_root="k8s.io/kubernetes", org_marker="k8s.io")


@pytest.fixture()
def go_tree(tmp_path: Path) -> Path:
    """Create a small tree of Go packages, some in order and some not.

    Layout::

        good/a.go            in order
        bad/b.go             out of order
        bad/zz_generated.go  out of order, generated
        vendor/v/v.go        out of order, vendored
        .hidden/h.go         out of order, hidden
        _output/o.go         out of order, build output
    """
    unordered = go_source(["github.com/z/z", "fmt"])
    (tmp_path / "good").mkdir()
    (tmp_path / "good" / "a.go").write_text(
        go_source(["fmt", "os"], ["github.com/a/a"]), encoding="utf-8"
    )
    (tmp_path / "bad").mkdir()
    (tmp_path / "bad" / "b.go").write_text(unordered, encoding="utf-8")
    (tmp_path / "bad" / "zz_generated.go").write_text(unordered, encoding="utf-8")
    for hidden in ("vendor/v", ".hidden", "_output"):
        d = tmp_path / hidden
        d.mkdir(parents=True)
        (d / "x.go").write_text(unordered, encoding="utf-8")
    return tmp_path


@pytest.fixture()
def fixture_copy(tmp_path: Path):
    """Return a helper that copies fixture files into their own directory."""

    def _copy(*names: str, dirname: str = "pkg") -> Path:
        target = tmp_path / dirname
        target.mkdir(parents=True, exist_ok=True)
        for name in names:
            src = FIXTURES_DIR / name
            shutil.copy(src, target / src.name)
        return target

    return _copy
