"""
relative module resolution for default import checks.

maps a relative import specifier to a file on disk by probing the
specifier as written and then with each source extension appended.
directory index files ('./Foo/index.js') are not resolved.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .filters import SOURCE_EXTENSIONS, is_relative_specifier

logger = logging.getLogger(__name__)


def candidate_paths(specifier: str, from_file: str | Path) -> list[Path]:
    """
    list the paths probed for a specifier, in probe order.

    arguments:
        `specifier: str`
            relative module specifier
        `from_file: str | Path`
            path of the importing file

    returns: `list[Path]`
        the base path followed by the base path with each source extension
    """
    from_dir = os.path.dirname(os.path.abspath(from_file))
    base = os.path.normpath(os.path.join(from_dir, specifier))
    return [Path(base)] + [Path(base + extension) for extension in SOURCE_EXTENSIONS]


def _exists(path: Path) -> bool:
    try:
        return path.exists()
    except (OSError, ValueError):
        return False


def resolve_import(specifier: str, from_file: str | Path) -> Path | None:
    """
    resolve a relative specifier to an existing path.

    arguments:
        `specifier: str`
            module specifier as written in the import statement
        `from_file: str | Path`
            path of the importing file

    returns: `Path | None`
        the first candidate that exists, or none if the specifier is not
        relative or nothing exists at any candidate path
    """
    if not is_relative_specifier(specifier):
        return None

    try:
        candidates = candidate_paths(specifier, from_file)
    except (OSError, ValueError):
        return None

    for candidate in candidates:
        if _exists(candidate):
            logger.debug("resolved '%s' to %s", specifier, candidate)
            return candidate

    logger.debug("could not resolve '%s' from %s", specifier, from_file)
    return None
