from __future__ import annotations

from pathlib import Path

from pdf2site.io_utils import atomic_write_text


def test_atomic_write_creates_parents_and_replaces(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "out.txt"
    atomic_write_text(target, "first")
    atomic_write_text(target, "second\r\nline")
    assert target.read_bytes() == b"second\r\nline"
    # no temp files left behind
    assert [p.name for p in target.parent.iterdir()] == ["out.txt"]
