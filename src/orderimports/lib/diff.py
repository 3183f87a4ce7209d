"""diff — line-based text diff between the declared and expected import blocks.

The analyzer only cares whether the result is empty.  The rendered text is a
unified diff that keeps the whole block as context, so a reader sees every
import of the file with the misplaced ones marked ``-``/``+``.
"""

from __future__ import annotations

import difflib

from orderimports.lib import config


def diff_text(got: str, want: str) -> str:
    """Diff two newline-joined import blocks.

    Args:
        got: The block as declared in the file.
        want: The expected block.

    Returns:
        An empty string when the blocks are equal, otherwise a unified diff
        labelled with the configured got/want names, ending in a newline.
    """
    if got == want:
        return ""
    got_lines = got.split("\n")
    want_lines = want.split("\n")
    lines = difflib.unified_diff(
        got_lines,
        want_lines,
        fromfile=config.get_str("diff.got_label"),
        tofile=config.get_str("diff.want_label"),
        n=max(len(got_lines), len(want_lines)),
        lineterm="",
    )
    return "\n".join(lines) + "\n"
