"""Persist an ``OutputTree`` into a site directory.

``index.html`` doubles as the "generated" marker checked before export, so it
is removed first and written last: if any write fails, the directory never
looks like a complete site. Every file is replaced whole, which makes a
retry after failure safe. Generated paths the new tree no longer contains
(another variant's script, a dropped custom stylesheet or sitemap) are
removed; page fragments and page images are never touched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from contextlib import suppress
from pathlib import Path

from pdf2site.io_utils import atomic_write_text
from pdf2site.model.tree import INDEX_PATH, OutputTree
from pdf2site.render.site import GENERATED_PATHS

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, dict[str, int | str]], None] | None


def _safe_emit(on_progress: ProgressCallback, event: str, payload: dict[str, int | str]) -> None:
    if on_progress is None:
        return
    with suppress(Exception):
        on_progress(event, payload)


def write_output_tree(
    tree: OutputTree,
    site_dir: Path,
    on_progress: ProgressCallback = None,
    owned_paths: Iterable[str] = GENERATED_PATHS,
) -> list[Path]:
    """Write every file of ``tree`` under ``site_dir`` and return the written paths.

    Errors from the filesystem propagate unchanged.
    """

    site_dir.mkdir(parents=True, exist_ok=True)
    index_path = site_dir / INDEX_PATH
    index_path.unlink(missing_ok=True)
    for rel in owned_paths:
        if rel not in tree:
            stale = site_dir / rel
            if stale.is_file():
                stale.unlink()
                logger.debug("Removed stale %s", stale)

    _safe_emit(on_progress, "write:start", {"files": len(tree)})
    written: list[Path] = []
    index_content: str | None = None
    for entry in tree:
        if entry.path == INDEX_PATH:
            index_content = entry.content
            continue
        dest = site_dir / entry.path
        atomic_write_text(dest, entry.content)
        written.append(dest)
        _safe_emit(on_progress, "file:written", {"path": entry.path})

    if index_content is not None:
        atomic_write_text(index_path, index_content)
        written.append(index_path)
        _safe_emit(on_progress, "file:written", {"path": INDEX_PATH})

    logger.info("Wrote %d files to %s", len(written), site_dir)
    _safe_emit(on_progress, "write:finalized", {"files": len(written)})
    return written


def is_generated(site_dir: Path) -> bool:
    return (site_dir / INDEX_PATH).is_file()


__all__ = ["is_generated", "write_output_tree"]
