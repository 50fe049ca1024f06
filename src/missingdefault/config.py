"""
configuration loading for missingdefault.

this module handles loading and validation of configuration from
pyproject.toml, .missingdefault.toml, and environment variables.
configuration only shapes the command-line runner (which files are
checked, how diagnostics are reported); the checks themselves have no
options.
"""

from __future__ import annotations

import os
import tomllib
from contextlib import suppress
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Final, TypeGuard

SEVERITIES: Final[tuple[str, ...]] = ("error", "warning", "info")

DEFAULT_INCLUDE: Final[list[str]] = ["*.js", "*.jsx", "*.ts", "*.tsx"]

DEFAULT_EXCLUDE: Final[list[str]] = [
    "node_modules",
    ".git",
    "dist",
    "build",
    "coverage",
]

_TRUTHY: Final[tuple[str, ...]] = ("true", "1", "yes")


@dataclass
class CacheConfig:
    """
    export surface caching settings.

    attributes:
        `enabled: bool`
            whether surfaces are memoised within an analysis pass
        `max_entries: int`
            maximum number of cached surfaces (oldest evicted first)
    """

    enabled: bool = True
    max_entries: int = 10000


@dataclass
class Config:
    """
    main configuration class for missingdefault.

    attributes:
        `project_root: Path`
            root directory of the project
        `include: list[str]`
            glob patterns for files to check
        `exclude: list[str]`
            glob patterns for files/directories to skip
        `respect_gitignore: bool`
            whether files ignored by .gitignore are skipped
        `severity: str`
            severity attached to reported diagnostics
        `cache: CacheConfig`
            caching configuration
        `explicit: set[str]`
            names of the settings a configuration source actually set
            ('cache.enabled' and 'cache.max_entries' for cache settings);
            only these are taken by `merge`
    """

    project_root: Path = field(default_factory=lambda: Path(".").resolve())
    include: list[str] = field(default_factory=lambda: DEFAULT_INCLUDE.copy())
    exclude: list[str] = field(default_factory=lambda: DEFAULT_EXCLUDE.copy())
    respect_gitignore: bool = True
    severity: str = "error"
    cache: CacheConfig = field(default_factory=CacheConfig)
    explicit: set[str] = field(default_factory=set, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Ensure project_root is a path object."""
        if isinstance(self.project_root, str):
            self.project_root = Path(self.project_root)

    @classmethod
    def from_pyproject_toml(cls, project_root: str | Path) -> Config | None:
        """
        Load configuration from the [tool.missingdefault] table of pyproject.toml.

        arguments:
            `project_root: str | Path`
                project root directory containing pyproject.toml

        returns: `Config | None`
            configuration object if found, none otherwise
        """
        project_path = Path(project_root)
        pyproject = project_path.joinpath("pyproject.toml")

        if not pyproject.exists():
            return None

        try:
            with open(pyproject, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError):
            return None

        tool_config = data.get("tool", {}).get("missingdefault")
        if not isinstance(tool_config, dict):
            return None
        return cls._from_dict(tool_config, project_path)

    @classmethod
    def from_missingdefault_toml(cls, project_root: str | Path) -> Config | None:
        """
        Load configuration from .missingdefault.toml.

        arguments:
            `project_root: str | Path`
                project root directory containing .missingdefault.toml

        returns: `Config | None`
            configuration object if found, none otherwise
        """
        project_path = Path(project_root)
        config_file = project_path.joinpath(".missingdefault.toml")

        if not config_file.exists():
            return None

        try:
            with open(config_file, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError):
            return None

        return cls._from_dict(data, project_path)

    @classmethod
    def from_environment(cls) -> Config:
        """
        Load configuration from environment variables.

        returns: `Config`
            configuration with values from environment
        """
        config = cls()

        if severity := os.environ.get("MISSINGDEFAULT_SEVERITY"):
            if severity.lower() in SEVERITIES:
                config.severity = severity.lower()
                config.explicit.add("severity")

        if no_cache := os.environ.get("MISSINGDEFAULT_NO_CACHE"):
            config.cache.enabled = no_cache.lower() not in _TRUTHY
            config.explicit.add("cache.enabled")

        if respect_gitignore := os.environ.get("MISSINGDEFAULT_RESPECT_GITIGNORE"):
            config.respect_gitignore = respect_gitignore.lower() in _TRUTHY
            config.explicit.add("respect_gitignore")

        if max_entries := os.environ.get("MISSINGDEFAULT_CACHE_MAX_ENTRIES"):
            with suppress(ValueError):
                if _valid_max_entries(limit := int(max_entries)):
                    config.cache.max_entries = limit
                    config.explicit.add("cache.max_entries")

        return config

    @classmethod
    def load(cls, project_root: str | Path = ".") -> Config:
        """
        Load configuration from all available sources.

        sources are loaded in order of priority (later overrides earlier):
        1. default values
        2. pyproject.toml
        3. .missingdefault.toml
        4. environment variables

        arguments:
            `project_root: str | Path`
                project root directory

        returns: `Config`
            merged configuration from all sources
        """
        project_path = Path(project_root).resolve()
        config = cls(project_root=project_path)

        if pyproject_config := cls.from_pyproject_toml(project_path):
            config = config.merge(pyproject_config)

        # .missingdefault.toml overrides pyproject.toml
        if own_config := cls.from_missingdefault_toml(project_path):
            config = config.merge(own_config)

        config = config.merge(cls.from_environment())

        return config

    def merge(self, other: Config) -> Config:
        """
        merge another configuration into this one.

        only the values 'other' was explicitly given (see `explicit`) are
        taken; everything else is kept from this config. cache settings
        are merged field by field.

        arguments:
            `other: Config`
                configuration to merge

        returns: `Config`
            new merged configuration
        """
        merged = replace(
            self,
            include=self.include.copy(),
            exclude=self.exclude.copy(),
            cache=replace(self.cache),
            explicit=self.explicit | other.explicit,
        )

        for name in other.explicit:
            if name.startswith("cache."):
                key = name.removeprefix("cache.")
                setattr(merged.cache, key, getattr(other.cache, key))
            else:
                setattr(merged, name, getattr(other, name))

        return merged

    @classmethod
    def _from_dict(cls, data: dict[str, Any], project_root: Path) -> Config:
        """
        Create configuration from a dictionary.

        unknown keys and values of the wrong type are ignored; every
        accepted key is recorded in `explicit`.

        arguments:
            `data: dict[str, Any]`
                configuration dictionary
            `project_root: Path`
                project root path

        returns: `Config`
            configuration object
        """
        config = cls(project_root=project_root)

        if isinstance(include := data.get("include"), list):
            config.include = [str(pattern) for pattern in include]
            config.explicit.add("include")
        if isinstance(exclude := data.get("exclude"), list):
            config.exclude = [str(pattern) for pattern in exclude]
            config.explicit.add("exclude")
        if isinstance(respect_gitignore := data.get("respect_gitignore"), bool):
            config.respect_gitignore = respect_gitignore
            config.explicit.add("respect_gitignore")
        if isinstance(severity := data.get("severity"), str) and severity.lower() in SEVERITIES:
            config.severity = severity.lower()
            config.explicit.add("severity")

        if isinstance(cache_data := data.get("cache"), dict):
            if isinstance(enabled := cache_data.get("enabled"), bool):
                config.cache.enabled = enabled
                config.explicit.add("cache.enabled")
            if _valid_max_entries(max_entries := cache_data.get("max_entries")):
                config.cache.max_entries = max_entries
                config.explicit.add("cache.max_entries")

        return config


def _valid_max_entries(value: object) -> TypeGuard[int]:
    # bool is an int subclass; toml 'true' is not a limit
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0
