"""parser — extract import specs and their positions from Go source files.

Go sources are parsed with tree-sitter and the tree-sitter-go grammar.  Only
the top-level ``import_declaration`` nodes are read; every ``import_spec``
inside them becomes an ``ImportRecord`` in declaration order.

Tree-sitter recovers from syntax errors instead of failing, so the tree is
scanned for ``ERROR`` and missing nodes afterwards.  The grammar is also
looser than the Go compiler about file layout, so a missing package clause,
top-level statements and late imports are reported separately.  Source that
is not valid UTF-8 is rejected before parsing.  A directory with any such
error is reported as a whole, the same way ``go/parser.ParseDir`` fails for
a package with one bad file.

Design notes:
    One ``GoParser`` is built per analysis session and reused for every file
    in the run.  Rows reported by tree-sitter are 0-based; records and
    errors carry 1-based lines and columns.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Iterator, List

from tree_sitter import Language, Node, Parser

from orderimports.exceptions import ImportOrderParseError, SourceError
from orderimports.lib import config
from orderimports.lib.models import ImportRecord

_QUOTES = "\"`"
_BOM = b"\xef\xbb\xbf"

# top-level node types a Go file may hold besides its package clause
_DECLARATIONS = frozenset({
    "import_declaration",
    "const_declaration",
    "type_declaration",
    "var_declaration",
    "function_declaration",
    "method_declaration",
})


@dataclass
class ParsedFile:
    """Imports of one Go source file."""

    path: str
    imports: List[ImportRecord] = field(default_factory=list)

    @property
    def name(self) -> str:
        return os.path.basename(self.path)


class GoParser:
    """Parse Go files into import lists, reusing one tree-sitter parser."""

    def __init__(self) -> None:
        self._parser = Parser(self.get_language())
        self._suffix = config.get_str("defaults.source_suffix")

    @staticmethod
    def get_language() -> Language:
        import tree_sitter_go as tsgo
        return Language(tsgo.language())

    # -- single file --------------------------------------------------------

    def parse_source(self, source: bytes, path: str) -> tuple[ParsedFile, list[SourceError]]:
        """Parse Go source bytes.

        Args:
            source: Raw file content.
            path: File path used in records and errors.

        Returns:
            The parsed file and the syntax errors found in it (possibly none).
        """
        try:
            source.decode("utf-8")
        except UnicodeDecodeError as exc:
            return ParsedFile(path=path), [_decode_error(source, exc.start, path)]
        if source.startswith(_BOM):
            # the BOM has no newline, so stripping it keeps line numbers
            source = source[len(_BOM):]

        tree = self._parser.parse(source)
        root = tree.root_node
        errors = list(_syntax_errors(root, path)) if root.has_error else []
        errors.extend(_layout_errors(root, path))
        errors.sort(key=lambda e: (e.line, e.column))
        parsed = ParsedFile(path=path, imports=_import_records(root, source))
        return parsed, errors

    def parse_file(self, path: str) -> ParsedFile:
        """Parse one Go file.

        Raises:
            ImportOrderParseError: If the file cannot be read or has syntax
                errors.
        """
        parsed, errors = self._parse_path(path)
        if errors:
            raise ImportOrderParseError(os.path.dirname(path), errors)
        return parsed

    def _parse_path(self, path: str) -> tuple[ParsedFile, list[SourceError]]:
        try:
            with open(path, "rb") as fh:
                source = fh.read()
        except OSError as exc:
            msg = config.get_str("messages.read_error").format(error=exc)
            return ParsedFile(path=path), [SourceError(path, 0, 0, msg)]
        return self.parse_source(source, path)

    # -- directory ----------------------------------------------------------

    def parse_dir(self, directory: str) -> list[ParsedFile]:
        """Parse every Go file directly inside a directory.

        Files are returned in file-name order.  Subdirectories are not
        entered.

        Raises:
            ImportOrderParseError: With every error found, if any file in the
                directory cannot be read or parsed.
        """
        try:
            with os.scandir(directory) as it:
                names = sorted(
                    entry.name
                    for entry in it
                    if entry.name.endswith(self._suffix) and entry.is_file()
                )
        except OSError as exc:
            msg = config.get_str("messages.read_error").format(error=exc)
            raise ImportOrderParseError(
                directory, [SourceError(directory, 0, 0, msg)]
            ) from exc

        files: list[ParsedFile] = []
        errors: list[SourceError] = []
        for name in names:
            path = os.path.normpath(os.path.join(directory, name))
            parsed, file_errors = self._parse_path(path)
            files.append(parsed)
            errors.extend(file_errors)
        if errors:
            raise ImportOrderParseError(directory, errors)
        return files


# ---------------------------------------------------------------------------
# Tree helpers
# ---------------------------------------------------------------------------


def _import_specs(root: Node) -> Iterator[Node]:
    for decl in root.named_children:
        if decl.type != "import_declaration":
            continue
        for child in decl.named_children:
            if child.type == "import_spec":
                yield child
            elif child.type == "import_spec_list":
                for spec in child.named_children:
                    if spec.type == "import_spec":
                        yield spec


def _import_records(root: Node, source: bytes) -> list[ImportRecord]:
    records: list[ImportRecord] = []
    for spec in _import_specs(root):
        path_node = spec.child_by_field_name("path")
        if path_node is None:
            continue
        raw = source[path_node.start_byte:path_node.end_byte].decode("utf-8", "replace")
        records.append(ImportRecord(
            path="".join(ch for ch in raw if ch not in _QUOTES),
            line=spec.start_point[0] + 1,
            end_line=spec.end_point[0] + 1,
            index=len(records),
        ))
    return records


def _decode_error(source: bytes, offset: int, path: str) -> SourceError:
    line_start = source.rfind(b"\n", 0, offset) + 1
    return SourceError(
        path,
        source.count(b"\n", 0, offset) + 1,
        offset - line_start + 1,
        config.get_str("messages.illegal_utf8"),
    )


def _first_token(node: Node) -> str:
    while node.children:
        node = node.children[0]
    if node.is_named:
        return node.text.decode("utf-8", "replace")
    return node.type


def _layout_errors(root: Node, path: str) -> Iterator[SourceError]:
    """Yield errors for a file laid out in a way the Go compiler rejects.

    The grammar accepts a missing package clause, statements at the top
    level and imports after other declarations; ``go/parser`` does not.
    """
    decls = [n for n in root.named_children if n.type not in ("comment", "ERROR")]
    if not decls or decls[0].type != "package_clause":
        if decls:
            pos, found = decls[0].start_point, f"'{_first_token(decls[0])}'"
        else:
            pos, found = root.end_point, "'EOF'"
        msg = config.get_str("messages.expected_package").format(found=found)
        yield SourceError(path, pos[0] + 1, pos[1] + 1, msg)
        return

    seen_other = False
    for node in decls[1:]:
        if node.type == "import_declaration":
            if seen_other:
                row, col = node.start_point[0], node.start_point[1]
                yield SourceError(
                    path, row + 1, col + 1, config.get_str("messages.late_import")
                )
            continue
        seen_other = True
        if node.type not in _DECLARATIONS:
            row, col = node.start_point[0], node.start_point[1]
            yield SourceError(
                path, row + 1, col + 1, config.get_str("messages.non_declaration")
            )


def _syntax_errors(root: Node, path: str) -> Iterator[SourceError]:
    """Yield one error per ERROR or missing node, in source order."""
    syntax_msg = config.get_str("messages.syntax_error")
    missing_tpl = config.get_str("messages.missing_token")
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            row, col = node.start_point[0], node.start_point[1]
            msg = missing_tpl.format(token=node.type) if node.is_missing else syntax_msg
            yield SourceError(path, row + 1, col + 1, msg)
            continue
        # children reversed so the stack pops them in source order
        stack.extend(child for child in reversed(node.children) if child.has_error)
