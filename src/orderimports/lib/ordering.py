"""ordering — classify Go import paths into tiers and rebuild the import block.

Imports are expected in four groups, in this order:

    stdlib     first path segment has no dot ("fmt", "net/http")
    external   everything not matched by another rule ("github.com/x/y")
    org        first segment contains the org marker ("sigs.k8s.io/yaml")
    local      path starts with the local root ("k8s.io/kubernetes/pkg/api")

Each group is sorted by code point and followed by one blank line, except the
last.  The declared block keeps a blank entry wherever the source had a gap
between two imports, so both blocks can be compared as plain text.

Design notes:
    Rule precedence is the order of ``tier_predicates``.  The stdlib rule is
    checked before the local-root rule, so a dotless path under the local
    root is classified as stdlib.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from orderimports.lib.diff import diff_text
from orderimports.lib.models import FileReport, ImportRecord, Tier, TierRules

BLANK = ""

Predicate = Callable[[str], bool]


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


def _first_segment(path: str) -> str:
    return path.split("/", 1)[0]


def tier_predicates(rules: TierRules) -> list[tuple[Predicate, Tier]]:
    """Return the classification rules in precedence order.

    Args:
        rules: Local root and org marker strings.

    Returns:
        ``(predicate, tier)`` pairs; the first predicate that accepts a path
        decides its tier.  The last pair accepts everything.
    """
    return [
        (lambda p: "." not in _first_segment(p), Tier.STDLIB),
        (lambda p: p.startswith(rules.local_root), Tier.LOCAL),
        (lambda p: rules.org_marker in _first_segment(p), Tier.ORG),
        (lambda p: True, Tier.EXTERNAL),
    ]


def classify(path: str, rules: TierRules) -> Tier:
    """Return the tier of an import path."""
    for predicate, tier in tier_predicates(rules):
        if predicate(path):
            return tier
    # unreachable: the last predicate accepts every path
    return Tier.EXTERNAL


def group_by_tier(paths: Sequence[str], rules: TierRules) -> dict[Tier, list[str]]:
    """Split paths into tiers, keeping duplicates and skipping blank entries."""
    predicates = tier_predicates(rules)
    groups: dict[Tier, list[str]] = {tier: [] for tier in Tier}
    for path in paths:
        if path == BLANK:
            continue
        for predicate, tier in predicates:
            if predicate(path):
                groups[tier].append(path)
                break
    return groups


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------


def build_ordered_block(records: Sequence[ImportRecord]) -> list[str]:
    """Return the import paths as declared, with blank entries for gaps.

    A blank entry goes before a record that starts more than one line after
    the previous record ends.  Imports on consecutive lines get none.
    """
    block: list[str] = []
    prev: Optional[ImportRecord] = None
    for rec in records:
        if prev is not None and rec.line > prev.end_line + 1:
            block.append(BLANK)
        block.append(rec.path)
        prev = rec
    return block


def build_expected_block(paths: Sequence[str], rules: TierRules) -> list[str]:
    """Return the paths regrouped by tier, each tier sorted.

    Blank entries in ``paths`` are ignored, so the function is a fixed point
    on its own output.

    Args:
        paths: Import paths in any order.
        rules: Local root and org marker strings.

    Returns:
        Tiers in fixed order, one blank entry between non-empty tiers.
    """
    block: list[str] = []
    for tier_paths in group_by_tier(paths, rules).values():
        if not tier_paths:
            continue
        block.extend(sorted(tier_paths))
        block.append(BLANK)
    if block and block[-1] == BLANK:
        block.pop()
    return block


def check_imports(
    path: str,
    records: Sequence[ImportRecord],
    rules: TierRules,
    differ: Callable[[str, str], str] = diff_text,
) -> FileReport:
    """Compare a file's declared import block against the expected one.

    Args:
        path: File path, carried into the report.
        records: The file's imports in declaration order.
        rules: Local root and org marker strings.
        differ: ``diff(got, want)`` returning an empty string when equal.

    Returns:
        A report whose ``diff`` is empty when the imports are in order.
    """
    got = build_ordered_block(records)
    want = build_expected_block([r.path for r in records], rules)
    diff = differ("\n".join(got), "\n".join(want))
    return FileReport(path=path, got=got, want=want, diff=diff)
