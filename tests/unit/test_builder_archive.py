from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

from pdf2site.builder.archive import archive_filename, create_archive
from pdf2site.errors import OutputNotGeneratedError


def _site(root: Path) -> Path:
    (root / "assets").mkdir(parents=True)
    (root / "index.html").write_text("<html></html>", encoding="utf-8")
    (root / "assets" / "b.css").write_text("b", encoding="utf-8")
    (root / "assets" / "a.png").write_bytes(b"\x89PNG")
    return root


@pytest.mark.parametrize(
    ("title", "job_id", "expected"),
    [
        ("Annual Report", "0123456789abcdef", "annual-report-01234567.zip"),
        ("", "abc", "presentation-abc.zip"),
        ("!!!", "job-1", "presentation-job-1.zip"),
    ],
)
def test_archive_filename(title: str, job_id: str, expected: str) -> None:
    assert archive_filename(title, job_id) == expected


def test_create_archive(tmp_path: Path) -> None:
    site = _site(tmp_path / "site")
    dest = create_archive(site, tmp_path / "out" / "site.zip")
    with zipfile.ZipFile(dest) as zf:
        assert zf.namelist() == ["assets/a.png", "assets/b.css", "index.html"]
        assert zf.read("index.html") == b"<html></html>"
        assert all(info.compress_type == zipfile.ZIP_DEFLATED for info in zf.infolist())
    assert not (tmp_path / "out" / "site.zip.part").exists()


def test_archive_is_reproducible(tmp_path: Path) -> None:
    site = _site(tmp_path / "site")
    a = create_archive(site, tmp_path / "a.zip").read_bytes()
    b = create_archive(site, tmp_path / "b.zip").read_bytes()
    assert a == b


def test_archive_inside_site_excludes_itself(tmp_path: Path) -> None:
    site = _site(tmp_path / "site")
    dest = create_archive(site, site / "export.zip")
    dest = create_archive(site, site / "export.zip")
    with zipfile.ZipFile(dest) as zf:
        assert "export.zip" not in zf.namelist()


def test_archive_requires_generated_site(tmp_path: Path) -> None:
    (tmp_path / "site").mkdir()
    with pytest.raises(OutputNotGeneratedError, match="Generate template first"):
        create_archive(tmp_path / "site", tmp_path / "x.zip")
