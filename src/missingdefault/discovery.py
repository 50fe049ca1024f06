"""
source file discovery for missingdefault.

walks a directory tree collecting javascript and typescript files that
match the configured include patterns, skipping excluded paths and
files ignored by .gitignore.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from fnmatch import fnmatch
from pathlib import Path
from typing import TYPE_CHECKING, final

from .config import DEFAULT_EXCLUDE, DEFAULT_INCLUDE

if TYPE_CHECKING:
    from gitignore_parser import IgnoreRule

logger = logging.getLogger(__name__)


@final
class PatternMatcher:
    """
    matcher for include/exclude glob patterns.

    a file matches if it matches at least one include pattern (or no
    include patterns are given) and neither it nor any of its parent
    directories matches an exclude pattern.

    attributes:
        `include: list[str]`
            glob patterns for files to include
        `exclude: list[str]`
            glob patterns for files or directories to exclude
    """

    include: list[str]
    exclude: list[str]

    def __init__(self, include: list[str], exclude: list[str]) -> None:
        self.include = include
        self.exclude = exclude

    def matches(self, file_path: Path, root: Path) -> bool:
        """
        check if a file matches the include/exclude patterns.

        arguments:
            `file_path: Path`
                the file path to check
            `root: Path`
                the root directory for relative path calculation

        returns: `bool`
            true if the file should be checked
        """
        try:
            rel_path = file_path.relative_to(root)
        except ValueError:
            rel_path = file_path

        rel_path_str = rel_path.as_posix()
        parts = rel_path_str.split("/")

        for pattern in self.exclude:
            if self._match_pattern(rel_path_str, file_path.name, pattern):
                return False
            # excluding a directory excludes everything below it
            for i in range(len(parts) - 1):
                if fnmatch(parts[i], pattern) or fnmatch("/".join(parts[: i + 1]), pattern):
                    return False

        if not self.include:
            return True

        return any(
            self._match_pattern(rel_path_str, file_path.name, pattern) for pattern in self.include
        )

    def _match_pattern(self, rel_path: str, file_name: str, pattern: str) -> bool:
        if fnmatch(rel_path, pattern) or fnmatch(file_name, pattern):
            return True

        # "**/x" also matches "x" at the root
        if pattern.startswith("**/"):
            return fnmatch(rel_path, pattern[3:])

        return False


@final
class GitignoreMatcher:
    """
    matcher for .gitignore rules found under a root directory.

    attributes:
        `root: Path`
            the root directory to match against
        `rules: list[tuple[Path, list[IgnoreRule]]]`
            list of (directory, rules) tuples
    """

    root: Path
    rules: list[tuple[Path, list[IgnoreRule]]]

    def __init__(self, root: Path) -> None:
        self.root = root.resolve()
        self.rules = []
        self._collect_gitignore_rules()

    def _collect_gitignore_rules(self) -> None:
        """Collect the rules of every .gitignore file under the root."""
        from gitignore_parser import rule_from_pattern

        for gitignore_file in self.root.rglob(".gitignore"):
            if not gitignore_file.is_file():
                continue

            try:
                content = gitignore_file.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError):
                logger.debug("could not read %s", gitignore_file)
                continue

            rules: list[IgnoreRule] = []
            for line_no, line in enumerate(content.splitlines()):
                if not line or line.startswith("#"):
                    continue

                rule = rule_from_pattern(
                    pattern=line,
                    base_path=gitignore_file.parent,
                    source=(gitignore_file, line_no),
                )
                if rule is not None:
                    rules.append(rule)

            if rules:
                self.rules.append((gitignore_file.parent, rules))

    def is_ignored(self, file_path: Path) -> bool:
        """
        check if a file, or any directory above it, is ignored.

        arguments:
            `file_path: Path`
                the file path to check

        returns: `bool`
            true if the file is ignored
        """
        resolved_path = file_path.resolve()

        parent = resolved_path.parent
        while parent != self.root and self.root in parent.parents:
            if self._is_path_ignored(parent):
                return True
            parent = parent.parent

        return self._is_path_ignored(resolved_path)

    def _is_path_ignored(self, path: Path) -> bool:
        matched = False

        for ignore_dir, rules in self.rules:
            # only rules from directories containing the path apply
            if ignore_dir != path and ignore_dir not in path.parents:
                continue

            for rule in rules:
                if rule.match(path):
                    matched = not rule.negation

        return matched


def _iter_files(root: Path) -> Generator[Path, None, None]:
    for path in root.rglob("*"):
        if path.is_file():
            yield path


def find_source_files(
    root: str | Path = ".",
    *,
    include: list[str] | None = None,
    exclude: list[str] | None = None,
    respect_gitignore: bool = True,
) -> tuple[Path, ...]:
    """
    find source files to check under a directory.

    arguments:
        `root: str | Path`
            the directory to search in (default: current directory)
        `include: list[str] | None`
            glob patterns for files to include (default: js/jsx/ts/tsx)
        `exclude: list[str] | None`
            glob patterns for files or directories to exclude
            (default: node_modules, .git, dist, build, coverage)
        `respect_gitignore: bool`
            whether to skip files ignored by .gitignore (default: True)

    returns: `tuple[Path, ...]`
        matching file paths, sorted
    """
    root = Path(root).resolve()
    if not root.is_dir():
        return ()

    pattern_matcher = PatternMatcher(
        DEFAULT_INCLUDE.copy() if include is None else include,
        DEFAULT_EXCLUDE.copy() if exclude is None else exclude,
    )
    gitignore_matcher = GitignoreMatcher(root) if respect_gitignore else None

    files: list[Path] = []
    for file_path in _iter_files(root):
        if not pattern_matcher.matches(file_path, root):
            continue
        if gitignore_matcher is not None and gitignore_matcher.is_ignored(file_path):
            continue
        files.append(file_path)

    logger.debug("found %d source files under %s", len(files), root)
    return tuple(sorted(files))
