"""Integration tests for orderimports.engine (AnalysisSession and check_paths)."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from conftest import go_source
from orderimports.engine import AnalysisSession, check_paths
from orderimports.exceptions import ConfigurationError
from orderimports.lib.models import TierRules


def _session(stream: io.StringIO, **kwargs) -> AnalysisSession:
    return AnalysisSession(stream=stream, **kwargs)


class TestAnalyzeDirectory:
    """Tests for checking a single directory."""

    def test_passing_fixtures(self, fixture_copy) -> None:
        """Correctly ordered files produce no reports and no output."""
        pkg = fixture_copy("passing/ordered.go", "passing/single_import.go")
        out = io.StringIO()
        session = _session(out)
        assert session.analyze_directory(str(pkg)) == []
        assert session.failed is False
        assert out.getvalue() == ""

    def test_scenario_a(self, fixture_copy) -> None:
        """Unsorted externals fail with a got/want diagnostic."""
        pkg = fixture_copy("failing/unordered.go")
        out = io.StringIO()
        session = _session(out)
        reports = session.analyze_directory(str(pkg))
        assert len(reports) == 1
        assert reports[0].got == ["fmt", "github.com/z/z", "github.com/a/a"]
        assert reports[0].want == ["fmt", "", "github.com/a/a", "github.com/z/z"]
        assert session.failed is True
        text = out.getvalue()
        assert text.startswith(f"{pkg / 'unordered.go'} (-got +want):\n--- got\n+++ want\n")

    def test_scenario_b(self, tmp_path: Path) -> None:
        """A file already grouped and sorted leaves the verdict alone."""
        (tmp_path / "b.go").write_text(go_source(["fmt"], ["github.com/a/a"]), encoding="utf-8")
        session = _session(io.StringIO())
        assert session.analyze_directory(str(tmp_path)) == []
        assert session.failed is False

    def test_scenario_c_parse_error(self, fixture_copy) -> None:
        """A directory that fails to parse prints the error and fails the run."""
        pkg = fixture_copy("edge_cases/broken.go")
        out = io.StringIO()
        session = _session(out)
        assert session.analyze_directory(str(pkg)) == []
        assert session.failed is True
        assert "broken.go:" in out.getvalue()
        assert session.result.parse_errors

    def test_mixed_tiers_fixture(self, fixture_copy) -> None:
        """Misplaced local and org imports are reported with the full regrouping."""
        pkg = fixture_copy("failing/mixed_tiers.go")
        reports = _session(io.StringIO()).analyze_directory(str(pkg))
        assert reports[0].want == [
            "os",
            "",
            "github.com/spf13/cobra",
            "",
            "sigs.k8s.io/yaml",
            "",
            "k8s.io/kubernetes/pkg/apis/core",
        ]

    def test_generated_files_ignored(self, fixture_copy) -> None:
        """Files matching the ignore pattern are never checked."""
        pkg = fixture_copy("edge_cases/zz_generated.deepcopy.go")
        session = _session(io.StringIO())
        assert session.analyze_directory(str(pkg)) == []
        assert session.failed is False
        assert session.result.files_checked == 0

    def test_custom_ignore_pattern(self, fixture_copy) -> None:
        """A custom ignore pattern replaces the default one."""
        pkg = fixture_copy("failing/unordered.go", "edge_cases/zz_generated.deepcopy.go")
        reports = _session(io.StringIO(), ignore_file="unordered").analyze_directory(str(pkg))
        assert [Path(r.path).name for r in reports] == ["zz_generated.deepcopy.go"]

    def test_ignored_file_still_parsed(self, fixture_copy) -> None:
        """A broken generated file still fails its directory."""
        pkg = fixture_copy("passing/ordered.go")
        (pkg / "zz_generated.go").write_bytes((pkg / "ordered.go").read_bytes() + b"\nfunc (\n")
        session = _session(io.StringIO())
        session.analyze_directory(str(pkg))
        assert session.failed is True

    def test_single_import_skipped(self, tmp_path: Path) -> None:
        """Files with fewer than two imports are not counted or checked."""
        (tmp_path / "one.go").write_text('package p\n\nimport "os"\n', encoding="utf-8")
        (tmp_path / "none.go").write_text("package p\n", encoding="utf-8")
        session = _session(io.StringIO())
        session.analyze_directory(str(tmp_path))
        assert session.result.files_checked == 0
        assert session.failed is False

    def test_custom_rules(self, tmp_path: Path) -> None:
        """Tier rules decide which imports count as org and local."""
        src = go_source(["fmt"], ["github.com/a/a"], ["example.org/lib"], ["example.org/app/pkg"])
        (tmp_path / "x.go").write_text(src, encoding="utf-8")
        custom = TierRules(local_root="example.org/app", org_marker="example.org")
        assert _session(io.StringIO(), rules=custom).analyze_directory(str(tmp_path)) == []
        assert _session(io.StringIO()).analyze_directory(str(tmp_path)) != []

    def test_bad_ignore_regex(self) -> None:
        """An invalid ignore pattern is a configuration error."""
        with pytest.raises(ConfigurationError, match="ignore regex"):
            AnalysisSession(ignore_file="(")


class TestRun:
    """Tests for whole runs over several directories."""

    def test_verdict_never_resets(self, fixture_copy) -> None:
        """A failing directory followed by a passing one still fails."""
        bad = fixture_copy("failing/unordered.go", dirname="a_bad")
        good = fixture_copy("passing/ordered.go", dirname="b_good")
        result = _session(io.StringIO()).run([str(bad), str(good)])
        assert result.failed is True
        assert result.dirs_checked == 2
        assert result.files_checked == 2

    def test_parse_error_does_not_stop_run(self, fixture_copy) -> None:
        """Directories after a parse failure are still analyzed."""
        broken = fixture_copy("edge_cases/broken.go", dirname="a_broken")
        bad = fixture_copy("failing/unordered.go", dirname="b_bad")
        out = io.StringIO()
        result = _session(out).run([str(broken), str(bad)])
        assert len(result.parse_errors) == 1
        assert len(result.reports) == 1
        assert out.getvalue().index("broken.go") < out.getvalue().index("unordered.go")

    def test_invalid_utf8_fails_directory(self, fixture_copy) -> None:
        """A file that is not UTF-8 fails its directory; later ones still run."""
        bad_bytes = fixture_copy("passing/ordered.go", dirname="a_bytes")
        (bad_bytes / "notes.go").write_bytes(b"package ordered\n\n// \xff\xfe bad\n")
        bad = fixture_copy("failing/unordered.go", dirname="b_bad")
        out = io.StringIO()
        result = _session(out).run([str(bad_bytes), str(bad)])
        assert result.failed is True
        assert result.parse_errors == [
            f"{bad_bytes / 'notes.go'}:3:4: illegal UTF-8 encoding"
        ]
        assert [Path(r.path).name for r in result.reports] == ["unordered.go"]

    @pytest.mark.parametrize(
        "fixture", ["edge_cases/empty.go", "edge_cases/no_package.go", "edge_cases/late_import.go"]
    )
    def test_layout_errors_fail_directory(self, fixture_copy, fixture: str) -> None:
        """Files the Go compiler rejects are parse errors, not violations."""
        pkg = fixture_copy("passing/ordered.go", fixture)
        result = _session(io.StringIO()).run([str(pkg)])
        assert result.failed is True
        assert len(result.parse_errors) == 1
        assert result.reports == []

    def test_banner_first(self, tmp_path: Path) -> None:
        """Text output starts with the banner line."""
        out = io.StringIO()
        _session(out).run([str(tmp_path)])
        assert out.getvalue() == "checking-imports-order: \n"

    def test_json_output(self, fixture_copy) -> None:
        """JSON mode writes one document and no text diagnostics."""
        pkg = fixture_copy("failing/unordered.go")
        out = io.StringIO()
        result = _session(out, output_format="json").run([str(pkg)])
        data = json.loads(out.getvalue())
        assert result.failed is True
        assert data["status"] == "failed"
        assert data["summary"]["violations"] == 1
        assert data["violations"][0]["want"][1] == ""


class TestCheckPaths:
    """Tests for the walker-plus-session entry point."""

    def test_tree(self, go_tree: Path) -> None:
        """Only the non-pruned, non-generated violation is reported."""
        out = io.StringIO()
        result = check_paths([str(go_tree)], stream=out)
        assert result.failed is True
        assert [Path(r.path).name for r in result.reports] == ["b.go"]
        assert "vendor" not in out.getvalue()

    def test_include_path(self, go_tree: Path) -> None:
        """Restricting to the good package passes."""
        result = check_paths([str(go_tree)], include_path="good", stream=io.StringIO())
        assert result.failed is False
        assert result.dirs_checked == 1

    def test_writes_run_log(self, go_tree: Path, tmp_path: Path) -> None:
        """A log directory receives one JSONL entry per run."""
        log_dir = tmp_path / "logs"
        check_paths([str(go_tree)], stream=io.StringIO(), log_dir=str(log_dir))
        lines = (log_dir / "orderimports.jsonl").read_text(encoding="utf-8").splitlines()
        assert len(lines) == 1
        entry = json.loads(lines[0])
        assert entry["status"] == "failed"
        assert entry["violations"] == 1
