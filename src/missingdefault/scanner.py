"""
default import scanner for javascript and typescript sources.

finds default-style import statements and turns each one into an
ImportOccurrence carrying the local binding, the specifier, and the
position of the binding. like the export extractor, this works on the
raw text rather than a syntax tree.

recognised forms (statement must start a line):
    import X from './mod'
    import X, { a, b } from './mod'
    import X, * as ns from './mod'
    import type X from './mod'
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from .policy import ImportOccurrence

logger = logging.getLogger(__name__)

_DEFAULT_IMPORT_PATTERN = re.compile(
    r"^[ \t]*import\s+"
    r"(?:type\s+)?"
    r"(?P<local>[A-Za-z_$][\w$]*)\s*"
    r"(?:,\s*(?:\{[^}]*\}|\*\s*as\s+[A-Za-z_$][\w$]*)\s*)?"
    r"from\s*"
    r"(?P<quote>['\"])(?P<specifier>[^'\"\n]+)(?P=quote)",
    re.MULTILINE,
)


def _position(source: str, offset: int) -> tuple[int, int]:
    """Convert a character offset into a (1-indexed line, 0-indexed column) pair."""
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return line, offset - line_start


def scan_default_imports(source: str, file_path: str | Path) -> list[ImportOccurrence]:
    """
    find the default imports in source text.

    arguments:
        `source: str`
            javascript or typescript source text
        `file_path: str | Path`
            path of the file the source belongs to

    returns: `list[ImportOccurrence]`
        occurrences in source order
    """
    file_path = Path(file_path)
    occurrences: list[ImportOccurrence] = []

    for match in _DEFAULT_IMPORT_PATTERN.finditer(source):
        line, column = _position(source, match.start("local"))
        occurrence = ImportOccurrence(
            local_name=match.group("local"),
            specifier=match.group("specifier"),
            file_path=file_path,
            line=line,
            column=column,
        )
        logger.debug(
            "found default import '%s' from '%s' at line %d",
            occurrence.local_name,
            occurrence.specifier,
            line,
        )
        occurrences.append(occurrence)

    return occurrences


def scan_file(file_path: str | Path) -> list[ImportOccurrence]:
    """
    read a file and find its default imports.

    arguments:
        `file_path: str | Path`
            path to the source file

    returns: `list[ImportOccurrence]`
        occurrences in source order

    raises:
        `FileNotFoundError`
            if the file does not exist
        `OSError`
            if the file cannot be read
    """
    file_path = Path(file_path)
    source = file_path.read_text(encoding="utf-8", errors="replace")
    return scan_default_imports(source, file_path)
