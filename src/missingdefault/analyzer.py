"""
default import analysis engine for missingdefault.

this module runs the per-occurrence policy over whole files: it scans
each file for default imports, checks every occurrence against the
module it imports, and applies ignore comments and the configured
severity. each call to analyse_file or analyse_paths is one analysis
pass with its own export surface cache.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .cache import ExportSurfaceCache
from .config import Config
from .ignore_parser import parse_ignore_comments
from .policy import CheckState, Diagnostic, evaluate_occurrence
from .scanner import scan_default_imports

logger = logging.getLogger(__name__)

ANALYSIS_ERROR_KIND = "analysis-error"


@dataclass
class AnalysisResult:
    """
    result of analysing one or more files.

    attributes:
        `diagnostics: list[Diagnostic]`
            all diagnostics found
        `files_analysed: list[Path]`
            files that were analysed
        `imports_checked: int`
            number of default imports checked
        `imports_skipped: int`
            number of default imports that were out of scope or unresolved
    """

    diagnostics: list[Diagnostic] = field(default_factory=list)
    files_analysed: list[Path] = field(default_factory=list)
    imports_checked: int = 0
    imports_skipped: int = 0

    def extend(self, other: AnalysisResult) -> None:
        """
        add another result's findings to this one.

        arguments:
            `other: AnalysisResult`
                result to fold in
        """
        self.diagnostics.extend(other.diagnostics)
        self.files_analysed.extend(other.files_analysed)
        self.imports_checked += other.imports_checked
        self.imports_skipped += other.imports_skipped


class DefaultImportAnalyzer:
    """
    checks default imports in javascript and typescript files.

    attributes:
        `config: Config`
            configuration settings
    """

    def __init__(self, config: Config | None = None) -> None:
        """
        initialise the analyzer.

        arguments:
            `config: Config | None`
                configuration settings (default: built-in defaults)
        """
        self.config = config if config is not None else Config()

    def new_surface_cache(self) -> ExportSurfaceCache:
        """
        create the export surface cache for a new analysis pass.

        returns: `ExportSurfaceCache`
            an empty cache
        """
        return ExportSurfaceCache(self.config.cache)

    def analyse_source(
        self,
        source: str,
        file_path: str | Path,
        surfaces: ExportSurfaceCache | None = None,
    ) -> AnalysisResult:
        """
        analyse source text as if it were the contents of file_path.

        relative imports are resolved against file_path's directory.

        arguments:
            `source: str`
                javascript or typescript source text
            `file_path: str | Path`
                path the source belongs to
            `surfaces: ExportSurfaceCache | None`
                surface cache of the current pass (default: a new one)

        returns: `AnalysisResult`
            diagnostics for the source
        """
        file_path = Path(file_path).absolute()
        surfaces = surfaces if surfaces is not None else self.new_surface_cache()
        result = AnalysisResult(files_analysed=[file_path])

        ignores = parse_ignore_comments(source)
        if ignores.file_disabled:
            logger.debug("checking disabled for %s", file_path)
            return result

        for occurrence in scan_default_imports(source, file_path):
            decision = evaluate_occurrence(occurrence, surfaces)

            if decision.state is CheckState.SKIPPED:
                result.imports_skipped += 1
                continue

            result.imports_checked += 1
            diagnostic = decision.diagnostic
            if diagnostic is None:
                continue

            if ignores.should_ignore(diagnostic.line):
                logger.debug("ignored diagnostic at %s:%d", file_path, diagnostic.line)
                continue

            diagnostic.severity = self.config.severity
            result.diagnostics.append(diagnostic)

        return result

    def analyse_file(
        self,
        file_path: str | Path,
        surfaces: ExportSurfaceCache | None = None,
    ) -> AnalysisResult:
        """
        analyse a single file.

        arguments:
            `file_path: str | Path`
                path to the source file
            `surfaces: ExportSurfaceCache | None`
                surface cache of the current pass (default: a new one)

        returns: `AnalysisResult`
            diagnostics for the file; an unreadable file yields a single
            analysis-error diagnostic
        """
        file_path = Path(file_path).absolute()

        try:
            source = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            return AnalysisResult(
                files_analysed=[file_path],
                diagnostics=[
                    Diagnostic(
                        file_path=file_path,
                        line=1,
                        column=0,
                        message=f"failed to analyse file: {e}",
                        kind=ANALYSIS_ERROR_KIND,
                        severity="error",
                    )
                ],
            )

        return self.analyse_source(source, file_path, surfaces)

    def analyse_paths(self, file_paths: Iterable[str | Path]) -> AnalysisResult:
        """
        analyse several files in one pass.

        arguments:
            `file_paths: Iterable[str | Path]`
                paths to the source files

        returns: `AnalysisResult`
            combined results
        """
        surfaces = self.new_surface_cache()
        result = AnalysisResult()

        for file_path in file_paths:
            result.extend(self.analyse_file(file_path, surfaces))

        logger.debug("export surface cache: %s", surfaces.get_stats())
        return result
