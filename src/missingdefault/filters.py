"""
scope and file-type filters for default import checks.

these predicates decide, before resolution, whether an import specifier
is something this checker can reason about at all, and after
resolution, whether the resolved file is a source file whose exports
can be read.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final

# source extensions, in resolver probe order
SOURCE_EXTENSIONS: Final[tuple[str, ...]] = (".js", ".jsx", ".ts", ".tsx")

ASSET_EXTENSIONS: Final[tuple[str, ...]] = (
    "png",
    "jpg",
    "jpeg",
    "gif",
    "svg",
    "ico",
    "webp",
)

ASSET_DIRECTORIES: Final[tuple[str, ...]] = ("assets", "images", "icons")

_ASSET_EXTENSION_PATTERN = re.compile(
    r"\.(?:" + "|".join(ASSET_EXTENSIONS) + r")$",
    re.IGNORECASE,
)


def is_relative_specifier(specifier: str) -> bool:
    """
    check if a specifier is rooted at the importing file's directory.

    arguments:
        `specifier: str`
            module specifier as written in the import statement

    returns: `bool`
        true for '.', '..', and specifiers starting with './' or '../'
    """
    if specifier in (".", ".."):
        return True
    return specifier.startswith(("./", "../", ".\\", "..\\"))


def is_asset_import(specifier: str) -> bool:
    """
    check if a specifier points at a bundler-resolved asset.

    arguments:
        `specifier: str`
            module specifier as written in the import statement

    returns: `bool`
        true if the specifier has an image extension or goes through
        an assets, images or icons directory
    """
    if _ASSET_EXTENSION_PATTERN.search(specifier):
        return True

    normalised = specifier.replace("\\", "/")
    return any(f"/{directory}/" in normalised for directory in ASSET_DIRECTORIES)


def is_out_of_scope(specifier: str) -> bool:
    """
    check if a specifier should be skipped before resolution.

    package imports cannot be checked by inspecting local files, and
    asset imports are idiomatically bound as default imports.

    arguments:
        `specifier: str`
            module specifier as written in the import statement

    returns: `bool`
        true if no diagnostic may ever be produced for this specifier
    """
    return not is_relative_specifier(specifier) or is_asset_import(specifier)


def is_checkable_file_type(path: str | Path) -> bool:
    """
    check if a resolved target is a source file with readable exports.

    arguments:
        `path: str | Path`
            resolved target path

    returns: `bool`
        true if the file extension is one of the recognised source extensions
    """
    return Path(path).suffix in SOURCE_EXTENSIONS
