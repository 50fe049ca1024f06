"""parser for missingdefault ignore comments.

this module parses suppression comments from javascript and typescript
source code.

formats (all case-insensitive, line or block comment):
    // missingdefault: ignore       suppress diagnostics on this line
    /* md: ignore */                 short alias
    // missingdefault: disable      skip the whole file

rules:
    - line ignores must be on the same line as the import's local binding
    - a disable comment may appear anywhere in the file
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

_IGNORE_PATTERN = re.compile(
    r"(?://|/\*)\s*(?:missingdefault|md)\s*:\s*ignore\b",
    re.IGNORECASE,
)

_DISABLE_PATTERN = re.compile(
    r"(?://|/\*)\s*(?:missingdefault|md)\s*:\s*disable\b",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class IgnoreDirective:
    """
    a parsed line ignore directive.

    attributes:
        `line: int`
            line number where the directive appears (1-indexed)
        `raw: str`
            the raw line text
    """

    line: int
    raw: str


@dataclass
class IgnoreParseResult:
    """
    result of parsing ignore comments from a file.

    attributes:
        `directives: dict[int, IgnoreDirective]`
            mapping of line numbers to ignore directives
        `file_disabled: bool`
            whether a disable comment turns checking off for the file
    """

    directives: dict[int, IgnoreDirective] = field(default_factory=dict)
    file_disabled: bool = False

    def should_ignore(self, line: int) -> bool:
        """
        check if diagnostics on a given line should be suppressed.

        arguments:
            `line: int`
                line number (1-indexed)

        returns: `bool`
            true if the file is disabled or the line carries an ignore comment
        """
        return self.file_disabled or line in self.directives


def parse_ignore_comments(source: str) -> IgnoreParseResult:
    """
    parse missingdefault ignore comments from source code.

    arguments:
        `source: str`
            javascript or typescript source code to parse

    returns: `IgnoreParseResult`
        parsed line directives and the file-level disable flag
    """
    result = IgnoreParseResult()

    for line_num, line in enumerate(source.split("\n"), start=1):
        if _DISABLE_PATTERN.search(line):
            result.file_disabled = True
            continue

        if _IGNORE_PATTERN.search(line):
            result.directives[line_num] = IgnoreDirective(line=line_num, raw=line.strip())

    return result


def parse_ignore_comments_from_file(file_path: str | Path) -> IgnoreParseResult:
    """
    parse missingdefault ignore comments from a file.

    arguments:
        `file_path: str | Path`
            path to the source file

    returns: `IgnoreParseResult`
        parsed line directives and the file-level disable flag

    raises:
        `FileNotFoundError`
            if the file does not exist
        `OSError`
            if the file cannot be read
    """
    file_path = Path(file_path)
    source = file_path.read_text(encoding="utf-8", errors="replace")
    return parse_ignore_comments(source)
