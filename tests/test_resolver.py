"""tests for relative module resolution."""

from __future__ import annotations

from pathlib import Path

from missingdefault.resolver import candidate_paths, resolve_import


class TestCandidatePaths:
    """tests for probe order."""

    def test_probe_order(self, tmp_path: Path) -> None:
        """test that the bare path is probed before each extension."""
        importer = tmp_path / "App.js"

        candidates = candidate_paths("./Widget", importer)

        base = tmp_path / "Widget"
        assert candidates == [
            base,
            tmp_path / "Widget.js",
            tmp_path / "Widget.jsx",
            tmp_path / "Widget.ts",
            tmp_path / "Widget.tsx",
        ]

    def test_parent_directory_is_normalised(self, tmp_path: Path) -> None:
        """test that '..' segments are collapsed."""
        importer = tmp_path / "src" / "App.js"

        candidates = candidate_paths("../lib/util", importer)

        assert candidates[0] == tmp_path / "lib" / "util"


class TestResolveImport:
    """tests for resolve_import."""

    def test_resolves_extension(self, tmp_path: Path) -> None:
        """test resolution by appending a source extension."""
        target = tmp_path / "Widget.jsx"
        target.write_text("export const Widget = 1;")

        assert resolve_import("./Widget", tmp_path / "App.js") == target

    def test_exact_path_wins(self, tmp_path: Path) -> None:
        """test that an exact match is preferred over appended extensions."""
        exact = tmp_path / "util.js"
        exact.write_text("")
        (tmp_path / "util.js.ts").write_text("")

        assert resolve_import("./util.js", tmp_path / "App.js") == exact

    def test_extension_order(self, tmp_path: Path) -> None:
        """test that .js is probed before .ts."""
        (tmp_path / "both.ts").write_text("")
        (tmp_path / "both.js").write_text("")

        assert resolve_import("./both", tmp_path / "App.js") == tmp_path / "both.js"

    def test_parent_directory(self, tmp_path: Path) -> None:
        """test resolution through a parent directory."""
        (tmp_path / "src").mkdir()
        target = tmp_path / "shared.ts"
        target.write_text("")

        assert resolve_import("../shared", tmp_path / "src" / "App.tsx") == target

    def test_missing_is_unresolved(self, tmp_path: Path) -> None:
        """test that a missing target resolves to none."""
        assert resolve_import("./missing-file", tmp_path / "App.js") is None

    def test_package_is_unresolved(self, tmp_path: Path) -> None:
        """test that package specifiers are never resolved."""
        (tmp_path / "react.js").write_text("")

        assert resolve_import("react", tmp_path / "App.js") is None

    def test_directory_index_not_resolved(self, tmp_path: Path) -> None:
        """test that directory index files are not looked up."""
        (tmp_path / "Foo").mkdir()
        (tmp_path / "Foo" / "index.js").write_text("export default 1;")

        # the directory itself exists and is returned as-is
        assert resolve_import("./Foo", tmp_path / "App.js") == tmp_path / "Foo"

    def test_invalid_path_does_not_raise(self, tmp_path: Path) -> None:
        """test that a specifier with a null byte is unresolved, not an error."""
        assert resolve_import("./bad\x00name", tmp_path / "App.js") is None
