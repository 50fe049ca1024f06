"""
diagnostic policy for default import occurrences.

decides, for one default import, whether to report nothing, report a
missing default export with the named exports that are available, or
report a missing default export on its own. every decision is a pure
function of the occurrence and the filesystem.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Final

from .exports import ExportSurface, read_export_surface
from .filters import is_checkable_file_type, is_out_of_scope
from .resolver import resolve_import

if TYPE_CHECKING:
    from .cache import ExportSurfaceCache

logger = logging.getLogger(__name__)

MESSAGE_WITH_ALTERNATIVES: Final[str] = (
    "Default import '{import_name}' not found. Available named exports: {named_exports}"
)
MESSAGE_NO_ALTERNATIVES: Final[str] = "Default import '{import_name}' not found"


class DiagnosticKind(str, Enum):
    """stable identifiers for the two kinds of report."""

    NO_DEFAULT_WITH_ALTERNATIVES = "no-default-export"
    NO_DEFAULT_NO_ALTERNATIVES = "no-default-export-simple"


class CheckState(str, Enum):
    """terminal states of a single occurrence check."""

    SKIPPED = "skipped"
    CLEAN = "clean"
    FLAGGED = "flagged"


@dataclass(frozen=True)
class ImportOccurrence:
    """
    a default-style import found in a source file.

    attributes:
        `local_name: str`
            the binding the default export is imported as
        `specifier: str`
            the module specifier string
        `file_path: Path`
            the importing file
        `line: int`
            line number of the local binding (1-indexed)
        `column: int`
            column number of the local binding (0-indexed)
    """

    local_name: str
    specifier: str
    file_path: Path
    line: int = 1
    column: int = 0


@dataclass
class Diagnostic:
    """
    a diagnostic for a default import with no matching default export.

    attributes:
        `file_path: Path`
            file containing the import
        `line: int`
            line number (1-indexed)
        `column: int`
            column number (0-indexed)
        `message: str`
            human-readable diagnostic message
        `kind: str`
            stable diagnostic code
        `local_name: str`
            the imported binding name
        `specifier: str`
            the module specifier
        `target: Path | None`
            the resolved module file
        `named_exports: list[str]`
            named exports available in the target
        `severity: str`
            'error', 'warning', or 'info'
    """

    file_path: Path
    line: int
    column: int
    message: str
    kind: str
    local_name: str = ""
    specifier: str = ""
    target: Path | None = None
    named_exports: list[str] = field(default_factory=list)
    severity: str = "error"


@dataclass(frozen=True)
class PolicyDecision:
    """
    outcome of checking one occurrence.

    attributes:
        `state: CheckState`
            terminal state reached
        `diagnostic: Diagnostic | None`
            the report, present only when flagged
    """

    state: CheckState
    diagnostic: Diagnostic | None = None


SKIPPED: Final[PolicyDecision] = PolicyDecision(CheckState.SKIPPED)
CLEAN: Final[PolicyDecision] = PolicyDecision(CheckState.CLEAN)


def render_message(local_name: str, named_exports: list[str] | tuple[str, ...]) -> str:
    """
    render the diagnostic message for a missing default export.

    arguments:
        `local_name: str`
            the imported binding name
        `named_exports: list[str] | tuple[str, ...]`
            available named exports, possibly empty

    returns: `str`
        the rendered message
    """
    if named_exports:
        return MESSAGE_WITH_ALTERNATIVES.format(
            import_name=local_name,
            named_exports=", ".join(named_exports),
        )
    return MESSAGE_NO_ALTERNATIVES.format(import_name=local_name)


def _flag(occurrence: ImportOccurrence, target: Path, surface: ExportSurface) -> PolicyDecision:
    names = list(surface.named_exports)
    kind = (
        DiagnosticKind.NO_DEFAULT_WITH_ALTERNATIVES
        if names
        else DiagnosticKind.NO_DEFAULT_NO_ALTERNATIVES
    )
    return PolicyDecision(
        state=CheckState.FLAGGED,
        diagnostic=Diagnostic(
            file_path=occurrence.file_path,
            line=occurrence.line,
            column=occurrence.column,
            message=render_message(occurrence.local_name, names),
            kind=kind.value,
            local_name=occurrence.local_name,
            specifier=occurrence.specifier,
            target=target,
            named_exports=names,
        ),
    )


def evaluate_occurrence(
    occurrence: ImportOccurrence,
    surfaces: ExportSurfaceCache | None = None,
) -> PolicyDecision:
    """
    check one default import occurrence.

    arguments:
        `occurrence: ImportOccurrence`
            the default import to check
        `surfaces: ExportSurfaceCache | None`
            pass-scoped surface cache (default: read the target directly)

    returns: `PolicyDecision`
        skipped, clean, or flagged with a diagnostic
    """
    if is_out_of_scope(occurrence.specifier):
        return SKIPPED

    target = resolve_import(occurrence.specifier, occurrence.file_path)
    if target is None or not is_checkable_file_type(target):
        return SKIPPED

    try:
        surface = surfaces.get(target) if surfaces is not None else read_export_surface(target)
    except (OSError, ValueError) as e:
        logger.debug("skipping '%s': cannot inspect %s: %s", occurrence.specifier, target, e)
        return SKIPPED

    if surface.has_default:
        return CLEAN

    logger.debug(
        "no default export in %s for '%s' (%d named exports)",
        target,
        occurrence.local_name,
        len(surface.named_exports),
    )
    return _flag(occurrence, target, surface)


def check_occurrence(
    occurrence: ImportOccurrence,
    surfaces: ExportSurfaceCache | None = None,
) -> Diagnostic | None:
    """
    check one default import occurrence and return its diagnostic, if any.

    arguments:
        `occurrence: ImportOccurrence`
            the default import to check
        `surfaces: ExportSurfaceCache | None`
            pass-scoped surface cache

    returns: `Diagnostic | None`
        the diagnostic, or none when skipped or clean
    """
    return evaluate_occurrence(occurrence, surfaces).diagnostic
