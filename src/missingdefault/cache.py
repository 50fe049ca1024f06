"""
pass-scoped export surface cache for missingdefault.

memoises export surfaces by resolved absolute path for the duration of
a single analysis pass. the cache is in-memory only and is never
persisted, so a new pass always sees current file contents.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import final

from .config import CacheConfig
from .exports import ExportSurface, read_export_surface

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """
    a single cache entry with metadata.

    attributes:
        `data: ExportSurface`
            cached export surface
        `timestamp: float`
            when this entry was cached
    """

    data: ExportSurface
    timestamp: float


@final
class ExportSurfaceCache:
    """
    in-memory cache of export surfaces for one analysis pass.

    attributes:
        `config: CacheConfig`
            cache configuration
        `hits: int`
            number of lookups served from the cache
        `misses: int`
            number of lookups that read the file
        `_entries: dict[str, CacheEntry]`
            cached surfaces keyed by absolute path
        `_reader: Callable[[Path], ExportSurface]`
            function used to compute a surface on a miss
    """

    config: CacheConfig
    hits: int
    misses: int
    _entries: dict[str, CacheEntry]
    _reader: Callable[[Path], ExportSurface]

    def __init__(
        self,
        config: CacheConfig | None = None,
        reader: Callable[[Path], ExportSurface] = read_export_surface,
    ) -> None:
        """
        initialise an empty cache.

        arguments:
            `config: CacheConfig | None`
                cache configuration (default: enabled with default limits)
            `reader: Callable[[Path], ExportSurface]`
                function computing a surface for a path
        """
        self.config = config if config is not None else CacheConfig()
        self.hits = 0
        self.misses = 0
        self._entries = {}
        self._reader = reader

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, file_path: str | Path) -> ExportSurface:
        """
        get the export surface for a file, reading it on first use.

        arguments:
            `file_path: str | Path`
                resolved path to the module file

        returns: `ExportSurface`
            the file's export surface
        """
        file_path = Path(file_path)

        if not self.config.enabled:
            self.misses += 1
            return self._reader(file_path)

        cache_key = str(file_path.absolute())

        if (entry := self._entries.get(cache_key)) is not None:
            self.hits += 1
            return entry.data

        self.misses += 1
        surface = self._reader(file_path)
        self._entries[cache_key] = CacheEntry(data=surface, timestamp=time.monotonic())
        self._evict_if_needed()
        return surface

    def invalidate(self, file_path: str | Path) -> None:
        """
        drop the cached surface for a file.

        arguments:
            `file_path: str | Path`
                path to the module file
        """
        _ = self._entries.pop(str(Path(file_path).absolute()), None)

    def clear(self) -> None:
        """Clear all cache entries."""
        self._entries.clear()

    def get_stats(self) -> dict[str, int]:
        """
        get cache statistics.

        returns: `dict[str, int]`
            entry count, hits and misses
        """
        return {
            "entries": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
        }

    def _evict_if_needed(self) -> None:
        """Evict old entries if the cache exceeds its limit."""
        max_entries = max(0, self.config.max_entries)
        if len(self._entries) <= max_entries:
            return

        sorted_entries = sorted(self._entries.items(), key=lambda x: x[1].timestamp)

        to_remove = len(sorted_entries) - max_entries
        for i in range(to_remove):
            del self._entries[sorted_entries[i][0]]
        logger.debug("evicted %d export surface cache entries", to_remove)
