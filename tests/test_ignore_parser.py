"""tests for ignore comment parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from missingdefault.ignore_parser import (
    parse_ignore_comments,
    parse_ignore_comments_from_file,
)


class TestParseIgnoreComments:
    """tests for parse_ignore_comments."""

    @pytest.mark.parametrize(
        "comment",
        [
            "// missingdefault: ignore",
            "//missingdefault:ignore",
            "/* missingdefault: ignore */",
            "// MissingDefault: Ignore",
            "// md: ignore",
        ],
    )
    def test_line_directive_forms(self, comment: str) -> None:
        """test each accepted line directive spelling."""
        source = f"const a = 1;\nimport Card from './Widget'; {comment}\n"

        result = parse_ignore_comments(source)

        assert 2 in result.directives
        assert result.should_ignore(2) is True
        assert result.should_ignore(1) is False
        assert result.file_disabled is False

    def test_directive_needs_comment_marker(self) -> None:
        """test that directive text outside a comment is not a directive."""
        result = parse_ignore_comments("const s = 'missingdefault: ignore';\n")

        assert result.directives == {}

    def test_file_disable(self) -> None:
        """test that a disable comment suppresses every line."""
        source = "/* missingdefault: disable */\nimport A from './a';\nimport B from './b';\n"

        result = parse_ignore_comments(source)

        assert result.file_disabled is True
        assert result.should_ignore(2) is True
        assert result.should_ignore(3) is True

    def test_raw_text_kept(self) -> None:
        """test that the raw line is stored on the directive."""
        result = parse_ignore_comments("  import A from './a'; // md: ignore  \n")

        assert result.directives[1].raw == "import A from './a'; // md: ignore"


class TestParseIgnoreCommentsFromFile:
    """tests for parse_ignore_comments_from_file."""

    def test_reads_file(self, tmp_path: Path) -> None:
        """test parsing a file on disk."""
        source_file = tmp_path / "App.js"
        source_file.write_text("import A from './a'; // missingdefault: ignore\n")

        result = parse_ignore_comments_from_file(source_file)

        assert result.should_ignore(1) is True

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """test that a missing file raises."""
        with pytest.raises(FileNotFoundError):
            _ = parse_ignore_comments_from_file(tmp_path / "missing.js")

    def test_undecodable_bytes(self, tmp_path: Path) -> None:
        """test that invalid utf-8 is replaced instead of raising."""
        source_file = tmp_path / "App.js"
        source_file.write_bytes(b"// \xff\xfe\nimport A from './a'; // md: ignore\n")

        result = parse_ignore_comments_from_file(source_file)

        assert result.should_ignore(2) is True
