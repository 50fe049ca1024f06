"""test fixtures and utilities for missingdefault.

this package contains synthetic javascript/typescript projects used by
the analyzer and cli tests.
"""

from __future__ import annotations

from .code_samples import create_mixed_project, create_widget_project, write_module

__all__ = [
    "create_mixed_project",
    "create_widget_project",
    "write_module",
]
