from __future__ import annotations

from pathlib import Path

import pytest

from pdf2site.builder.writer import is_generated, write_output_tree
from pdf2site.model.tree import OutputTree


def _tree() -> OutputTree:
    tree = OutputTree()
    tree.add("index.html", "<html>new</html>")
    tree.add("assets/site.css", "body{}")
    tree.add("js/app.js", "var x;")
    return tree


def test_writes_every_file_with_index_last(tmp_path: Path) -> None:
    events: list[tuple[str, object]] = []
    written = write_output_tree(_tree(), tmp_path, on_progress=lambda e, p: events.append((e, p.get("path"))))
    assert [p.relative_to(tmp_path).as_posix() for p in written] == [
        "assets/site.css",
        "js/app.js",
        "index.html",
    ]
    assert (tmp_path / "index.html").read_text(encoding="utf-8") == "<html>new</html>"
    assert events[-2] == ("file:written", "index.html")
    assert events[-1][0] == "write:finalized"
    assert is_generated(tmp_path)


def test_failed_write_leaves_no_index(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    (tmp_path / "index.html").write_text("<html>old</html>", encoding="utf-8")

    def _boom(path: Path, data: str, **kwargs: object) -> None:
        raise OSError("disk full")

    monkeypatch.setattr("pdf2site.builder.writer.atomic_write_text", _boom)
    with pytest.raises(OSError, match="disk full"):
        write_output_tree(_tree(), tmp_path)
    assert not is_generated(tmp_path)

    # retrying succeeds once the sink recovers
    monkeypatch.undo()
    write_output_tree(_tree(), tmp_path)
    assert (tmp_path / "index.html").read_text(encoding="utf-8") == "<html>new</html>"


def test_rewriting_is_idempotent(tmp_path: Path) -> None:
    write_output_tree(_tree(), tmp_path)
    first = {p: p.read_bytes() for p in tmp_path.rglob("*") if p.is_file()}
    write_output_tree(_tree(), tmp_path)
    second = {p: p.read_bytes() for p in tmp_path.rglob("*") if p.is_file()}
    assert first == second


def test_removes_owned_paths_missing_from_new_tree(tmp_path: Path) -> None:
    (tmp_path / "js").mkdir()
    (tmp_path / "js" / "old.js").write_text("old", encoding="utf-8")
    (tmp_path / "sitemap.xml").write_text("<urlset/>", encoding="utf-8")
    (tmp_path / "pages").mkdir()
    (tmp_path / "pages" / "page1.html").write_text("<p>1</p>", encoding="utf-8")

    write_output_tree(_tree(), tmp_path, owned_paths=("js/old.js", "sitemap.xml", "js/app.js"))

    assert not (tmp_path / "js" / "old.js").exists()
    assert not (tmp_path / "sitemap.xml").exists()
    assert (tmp_path / "js" / "app.js").read_text(encoding="utf-8") == "var x;"
    assert (tmp_path / "pages" / "page1.html").is_file()
