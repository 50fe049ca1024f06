"""
tests for the export surface cache.
"""

from __future__ import annotations

from pathlib import Path

from missingdefault.cache import ExportSurfaceCache
from missingdefault.config import CacheConfig
from missingdefault.exports import ExportSurface


class _CountingReader:
    """reader stub that records which paths were read."""

    def __init__(self) -> None:
        self.calls: list[Path] = []

    def __call__(self, path: Path) -> ExportSurface:
        self.calls.append(path)
        return ExportSurface(has_default=False, named_exports=(path.stem,))


class TestExportSurfaceCache:
    """tests for the ExportSurfaceCache class."""

    def test_reads_real_file(self, tmp_path: Path) -> None:
        """test the default reader against a file on disk."""
        module = tmp_path / "mod.ts"
        module.write_text("export const Foo = 1;")
        cache = ExportSurfaceCache()

        assert cache.get(module) == ExportSurface(False, ("Foo",))

    def test_memoises_by_path(self, tmp_path: Path) -> None:
        """test that a path is read once per cache."""
        reader = _CountingReader()
        cache = ExportSurfaceCache(CacheConfig(), reader=reader)
        module = tmp_path / "mod.js"

        first = cache.get(module)
        second = cache.get(module)

        assert first == second
        assert reader.calls == [module]
        assert cache.get_stats() == {"entries": 1, "hits": 1, "misses": 1}

    def test_disabled_always_reads(self, tmp_path: Path) -> None:
        """test that a disabled cache reads on every lookup."""
        reader = _CountingReader()
        cache = ExportSurfaceCache(CacheConfig(enabled=False), reader=reader)
        module = tmp_path / "mod.js"

        _ = cache.get(module)
        _ = cache.get(module)

        assert len(reader.calls) == 2
        assert len(cache) == 0

    def test_fresh_cache_sees_changes(self, tmp_path: Path) -> None:
        """test that a new pass re-reads a changed file."""
        module = tmp_path / "mod.js"
        module.write_text("export const Old = 1;")
        _ = ExportSurfaceCache().get(module)

        module.write_text("export default New;")

        assert ExportSurfaceCache().get(module).has_default is True

    def test_invalidate(self, tmp_path: Path) -> None:
        """test that an invalidated path is read again."""
        reader = _CountingReader()
        cache = ExportSurfaceCache(reader=reader)
        module = tmp_path / "mod.js"

        _ = cache.get(module)
        cache.invalidate(module)
        _ = cache.get(module)

        assert len(reader.calls) == 2

    def test_clear(self, tmp_path: Path) -> None:
        """test that clear empties the cache."""
        cache = ExportSurfaceCache(reader=_CountingReader())
        _ = cache.get(tmp_path / "a.js")
        _ = cache.get(tmp_path / "b.js")

        cache.clear()

        assert len(cache) == 0

    def test_eviction(self, tmp_path: Path) -> None:
        """test that the oldest entries are evicted past the limit."""
        reader = _CountingReader()
        cache = ExportSurfaceCache(CacheConfig(max_entries=2), reader=reader)

        for name in ("a", "b", "c"):
            _ = cache.get(tmp_path / f"{name}.js")

        assert len(cache) == 2
        _ = cache.get(tmp_path / "a.js")
        assert reader.calls.count(tmp_path / "a.js") == 2

    def test_negative_limit_keeps_nothing(self, tmp_path: Path) -> None:
        """test that a negative limit behaves like zero instead of failing."""
        reader = _CountingReader()
        cache = ExportSurfaceCache(CacheConfig(max_entries=-1), reader=reader)

        first = cache.get(tmp_path / "a.js")
        second = cache.get(tmp_path / "b.js")

        assert first.named_exports == ("a",)
        assert second.named_exports == ("b",)
        assert len(cache) == 0
