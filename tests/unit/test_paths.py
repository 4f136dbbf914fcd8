from __future__ import annotations

from pathlib import Path

from devflow.utils.paths import derive_test_file, discover_sources


def test_derive_test_file_inserts_suffix_before_extension() -> None:
    assert derive_test_file(Path("/src/main.go"), "_test") == Path("/src/main_test.go")
    assert derive_test_file(Path("handlers.py"), "_test") == Path("handlers_test.py")


def test_discover_sources_sorted_and_filtered(tmp_path: Path) -> None:
    for name in ["zeta.go", "alpha.go", "notes.txt"]:
        (tmp_path / name).write_text("")
    (tmp_path / "dir.go").mkdir()
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "inner.go").write_text("")

    sources = discover_sources(tmp_path, "*.go")

    assert [path.name for path in sources] == ["alpha.go", "zeta.go"]


def test_discover_sources_empty_directory(tmp_path: Path) -> None:
    assert discover_sources(tmp_path, "*.go") == []
