"""
missingdefault: static default export checker for javascript and typescript.

this package finds default imports of local modules (`import Card from
"./Widget"`) whose target file declares no default export, and reports
the named exports the module does provide. resolution and export
extraction are lexical and file-local; package imports and asset
imports are never checked.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .analyzer import AnalysisResult, DefaultImportAnalyzer
from .cache import ExportSurfaceCache
from .config import CacheConfig, Config
from .exports import (
    ExportSurface,
    has_default_export,
    named_exports,
    read_export_surface,
)
from .filters import is_checkable_file_type, is_out_of_scope
from .policy import (
    CheckState,
    Diagnostic,
    DiagnosticKind,
    ImportOccurrence,
    PolicyDecision,
    check_occurrence,
    evaluate_occurrence,
)
from .resolver import resolve_import
from .scanner import scan_default_imports

__all__ = [
    "AnalysisResult",
    "CacheConfig",
    "CheckState",
    "Config",
    "DefaultImportAnalyzer",
    "Diagnostic",
    "DiagnosticKind",
    "ExportSurface",
    "ExportSurfaceCache",
    "ImportOccurrence",
    "PolicyDecision",
    "check_occurrence",
    "evaluate_occurrence",
    "has_default_export",
    "is_checkable_file_type",
    "is_out_of_scope",
    "named_exports",
    "read_export_surface",
    "resolve_import",
    "scan_default_imports",
]
