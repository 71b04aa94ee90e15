from __future__ import annotations

import logging
import zipfile
from pathlib import Path

from pdf2site.builder.writer import is_generated
from pdf2site.errors import OutputNotGeneratedError
from pdf2site.ids import slugify

logger = logging.getLogger(__name__)

# Fixed entry timestamp so identical trees give identical archives
_ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)


class ArchiveError(RuntimeError):
    pass


def archive_filename(title: str | None, job_id: str) -> str:
    base = slugify(title or "", max_length=60) or "presentation"
    return f"{base}-{job_id[:8]}.zip"


def iter_site_files(site_dir: Path) -> list[Path]:
    return sorted(
        (p for p in site_dir.rglob("*") if p.is_file()),
        key=lambda p: p.relative_to(site_dir).as_posix(),
    )


def create_archive(site_dir: Path, dest: Path) -> Path:
    """Zip the whole site directory (relative paths, sorted, deflated).

    - site_dir: generated site (must contain index.html)
    - dest: archive path to create or overwrite

    Raises:
        OutputNotGeneratedError: If the site has not been generated
        ArchiveError: If the archive cannot be written
    """

    if not is_generated(site_dir):
        raise OutputNotGeneratedError(site_dir)
    dest.parent.mkdir(parents=True, exist_ok=True)
    tmp = dest.with_name(dest.name + ".part")
    dest_resolved = dest.resolve()
    try:
        with zipfile.ZipFile(tmp, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=9) as zf:
            for path in iter_site_files(site_dir):
                if path.resolve() in (dest_resolved, tmp.resolve()):
                    continue
                info = zipfile.ZipInfo(path.relative_to(site_dir).as_posix(), date_time=_ZIP_EPOCH)
                info.compress_type = zipfile.ZIP_DEFLATED
                info.external_attr = 0o644 << 16
                zf.writestr(info, path.read_bytes(), compresslevel=9)
        tmp.replace(dest)
    except OSError as exc:
        tmp.unlink(missing_ok=True)
        raise ArchiveError(f"Failed to write archive {dest}: {exc}") from exc
    logger.info("Archived %s to %s", site_dir, dest)
    return dest


__all__ = ["ArchiveError", "archive_filename", "create_archive", "iter_site_files"]
