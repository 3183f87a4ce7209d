"""walker — collect the directories to check under one or more roots.

Hidden directories and the configured skip names (vendored dependencies and
build output by default) are pruned: their subtrees are never entered.
Every other directory is collected when the include pattern matches its
path.  Walk errors are fatal; a missing or unreadable directory aborts the
run instead of silently shrinking what gets checked.
"""

from __future__ import annotations

import os
import re
from typing import Iterable, Optional, Sequence

from orderimports.exceptions import ConfigurationError, WalkError
from orderimports.lib import config


def compile_pattern(pattern: str, template_key: str) -> re.Pattern[str]:
    """Compile a user-supplied regex, turning failures into config errors.

    Args:
        pattern: The regex source.
        template_key: Config key of the message used when it fails.

    Raises:
        ConfigurationError: If the pattern does not compile.
    """
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ConfigurationError.bad_regex(template_key, exc) from exc


def is_pruned(name: str, skip_dirs: Iterable[str]) -> bool:
    """Return True when a directory with this name must not be entered."""
    if name in (".", ".."):
        return False
    return name.startswith(config.get_str("walker.hidden_prefix")) or name in skip_dirs


def collect_dirs(
    roots: Sequence[str],
    include_path: str = "",
    skip_dirs: Optional[Sequence[str]] = None,
) -> list[str]:
    """Walk the roots and return the sorted, deduplicated directories to check.

    Args:
        roots: Starting paths; ``["."]`` when empty.
        include_path: Regex searched in each directory path; empty matches
            every directory.
        skip_dirs: Directory names to prune.  Defaults to the configured
            vendor and build-output names.

    Returns:
        Cleaned directory paths in lexicographic order.

    Raises:
        ConfigurationError: If ``include_path`` is not a valid regex.
        WalkError: On any filesystem error during the walk.
    """
    include = compile_pattern(include_path, "messages.bad_include_regex")
    if skip_dirs is None:
        skip_dirs = config.get_list("walker.skip_dirs")
    skip = frozenset(skip_dirs)
    if not roots:
        roots = config.get_list("defaults.roots")

    found: set[str] = set()
    for root in roots:
        root = os.path.normpath(root)
        if not os.path.isdir(root):
            # os.walk ignores a missing root; the run must not
            try:
                os.stat(root)
            except OSError as exc:
                raise WalkError(root, exc) from exc
            continue
        if is_pruned(os.path.basename(root), skip):
            continue

        for dirpath, dirnames, _ in os.walk(root, onerror=_raise_walk_error):
            dirpath = os.path.normpath(dirpath)
            if include.search(dirpath):
                found.add(dirpath)
            dirnames[:] = [d for d in dirnames if not is_pruned(d, skip)]

    return sorted(found)


def _raise_walk_error(exc: OSError) -> None:
    raise WalkError(exc.filename or "", exc) from exc
