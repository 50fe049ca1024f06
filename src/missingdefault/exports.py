"""
export surface extraction for javascript and typescript modules.

this is a lexical extractor: it matches export statements with regular
expressions over the raw file text instead of parsing the module. it
can be fooled by export statements inside comments or string literals,
which is acceptable for an existence check. the file-based functions
never raise; an unreadable file has no default export and no named
exports.

recognised default export forms:
    export default <anything>
    export { name as default }
    export { a, name as default, b }

recognised named export forms:
    export { a, b as c, d }          (collects a, b, d: the declared names)
    export const|let|var|class|enum name
    export function name / export function* name / export async function name
    export const enum name
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

_DEFAULT_EXPORT_PATTERN = re.compile(r"export\s+default\s+")

_DEFAULT_REEXPORT_PATTERN = re.compile(r"export\s*\{[^}]*?[\w$]+\s+as\s+default\s*(?:,[^}]*)?\}")

_BRACE_EXPORT_PATTERN = re.compile(r"export\s*\{\s*([^}]+)\s*\}")

_DECLARATION_EXPORT_PATTERN = re.compile(
    r"export\s+"
    r"(?:const\s+enum\s+"
    r"|(?:async\s+)?function(?:\s*\*\s*|\s+)"
    r"|(?:const|let|var|class|enum)\s+)"
    r"([\w$]+)"
)

_ALIAS_SEPARATOR = re.compile(r"\s+as\s+")


@dataclass(frozen=True)
class ExportSurface:
    """
    the exports a module declares.

    attributes:
        `has_default: bool`
            whether the module has a default export
        `named_exports: tuple[str, ...]`
            declared named export identifiers, first-seen order, no duplicates
    """

    has_default: bool = False
    named_exports: tuple[str, ...] = ()


def has_default_export_in_source(source: str) -> bool:
    """
    check if module source text declares a default export.

    arguments:
        `source: str`
            module source text

    returns: `bool`
        true if any recognised default export form is present
    """
    return bool(
        _DEFAULT_EXPORT_PATTERN.search(source) or _DEFAULT_REEXPORT_PATTERN.search(source)
    )


def named_exports_in_source(source: str) -> tuple[str, ...]:
    """
    collect the named exports declared in module source text.

    brace lists are collected first, then declaration exports. for an
    aliased brace entry ('b as c') the declared name 'b' is collected,
    not the exported alias.

    arguments:
        `source: str`
            module source text

    returns: `tuple[str, ...]`
        unique identifiers in first-seen order
    """
    # dict keys keep insertion order and drop duplicates
    names: dict[str, None] = {}

    for match in _BRACE_EXPORT_PATTERN.finditer(source):
        for entry in match.group(1).split(","):
            name = _ALIAS_SEPARATOR.split(entry.strip())[0].strip()
            if name:
                names[name] = None

    for match in _DECLARATION_EXPORT_PATTERN.finditer(source):
        names[match.group(1)] = None

    return tuple(names)


def export_surface_from_source(source: str) -> ExportSurface:
    """
    compute the export surface of module source text.

    arguments:
        `source: str`
            module source text

    returns: `ExportSurface`
        default export flag and named exports
    """
    return ExportSurface(
        has_default=has_default_export_in_source(source),
        named_exports=named_exports_in_source(source),
    )


def _read_source(file_path: str | Path) -> str | None:
    try:
        return Path(file_path).read_text(encoding="utf-8", errors="replace")
    except (OSError, ValueError) as e:
        logger.debug("could not read %s: %s", file_path, e)
        return None


def read_export_surface(file_path: str | Path) -> ExportSurface:
    """
    read a module file and compute its export surface.

    arguments:
        `file_path: str | Path`
            path to the module file

    returns: `ExportSurface`
        the file's export surface, or an empty surface if it cannot be read
    """
    source = _read_source(file_path)
    if source is None:
        return ExportSurface()
    return export_surface_from_source(source)


def has_default_export(file_path: str | Path) -> bool:
    """
    check if a module file declares a default export.

    arguments:
        `file_path: str | Path`
            path to the module file

    returns: `bool`
        true if a default export is present, false if absent or unreadable
    """
    source = _read_source(file_path)
    return source is not None and has_default_export_in_source(source)


def named_exports(file_path: str | Path) -> tuple[str, ...]:
    """
    collect the named exports declared in a module file.

    arguments:
        `file_path: str | Path`
            path to the module file

    returns: `tuple[str, ...]`
        unique identifiers in first-seen order, empty if unreadable
    """
    source = _read_source(file_path)
    if source is None:
        return ()
    return named_exports_in_source(source)
