"""Page Store: per-page fragments of a job directory.

A job directory holds ``pages/pageN.html`` (one rendered fragment per PDF
page, 1-based), optional ``pages/pageN.txt`` with plain extracted text, and
``assets/`` with page images and shared styles. Missing pages never abort
loading: they are skipped here and placeholdered by the renderer.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from pdf2site.ingest.fragments import prepare_fragment
from pdf2site.model.job import Page
from pdf2site.pipeline_logger import log_fallback

logger = logging.getLogger(__name__)

PAGES_DIRNAME = "pages"
ASSETS_DIRNAME = "assets"
PAGE_STYLES = "assets/styles.css"
PAGE_ASSET_RE = re.compile(r"^page(\d+)\.png$")
_TRAILING_NUMBER_RE = re.compile(r"(\d+)(?=\.html$)")
DIRECT_FRAGMENT_RE = re.compile(r"^page\d+\.html$")


def _natural_key(path: Path) -> tuple[int, str]:
    m = _TRAILING_NUMBER_RE.search(path.name)
    return (int(m.group(1)) if m else 0, path.name)


def list_fragment_files(pages_dir: Path) -> list[Path]:
    if not pages_dir.is_dir():
        return []
    return sorted((p for p in pages_dir.iterdir() if p.suffix == ".html"), key=_natural_key)


def _fragment_path(pages_dir: Path, number: int, listing: list[Path]) -> Path | None:
    direct = pages_dir / f"page{number}.html"
    if direct.is_file():
        return direct
    if 0 < number <= len(listing):
        return listing[number - 1]
    return None


def load_pages(site_dir: Path, page_count: int) -> list[Page]:
    """Load fragments for pages ``1..page_count`` from ``site_dir/pages``.

    Listing order is only used when no file follows the ``pageN.html``
    naming (e.g. a converter that writes ``<pdf-name>N.html``). Otherwise a
    missing ``pageN.html`` is skipped so the renderer can placeholder it.
    """

    pages_dir = site_dir / PAGES_DIRNAME
    listing = list_fragment_files(pages_dir)
    if any(DIRECT_FRAGMENT_RE.match(p.name) for p in listing):
        listing = []
    pages: list[Page] = []
    for number in range(1, page_count + 1):
        path = _fragment_path(pages_dir, number, listing)
        if path is None:
            log_fallback("Page store", "missing_fragment", "skip", f"page={number}")
            continue
        html = prepare_fragment(path.read_text(encoding="utf-8"))
        text_path = pages_dir / f"page{number}.txt"
        text = text_path.read_text(encoding="utf-8") if text_path.is_file() else None
        pages.append(Page(index=number, html=html, text=text))
    logger.debug("Loaded %d/%d page fragments from %s", len(pages), page_count, pages_dir)
    return pages


def count_page_assets(site_dir: Path) -> int:
    assets_dir = site_dir / ASSETS_DIRNAME
    if not assets_dir.is_dir():
        return 0
    return sum(1 for p in assets_dir.iterdir() if PAGE_ASSET_RE.match(p.name))


def resolve_page_count(
    requested: int | None,
    recorded: int | None,
    site_dir: Path | None = None,
) -> int:
    """Resolve the page count: request value, recorded job value, assets on disk, then 1.

    Non-positive values count as absent.
    """

    for candidate in (requested, recorded):
        if candidate is not None and candidate >= 1:
            return int(candidate)
    if site_dir is not None:
        detected = count_page_assets(site_dir)
        if detected > 0:
            logger.info("Auto-detected %d pages from %s", detected, site_dir / ASSETS_DIRNAME)
            return detected
    log_fallback("Page count", "undeterminable", "1")
    return 1


def page_stylesheets(site_dir: Path) -> tuple[str, ...]:
    """Relative hrefs of page-store stylesheets present in ``site_dir``."""
    return (PAGE_STYLES,) if (site_dir / PAGE_STYLES).is_file() else ()


__all__ = [
    "ASSETS_DIRNAME",
    "PAGES_DIRNAME",
    "count_page_assets",
    "list_fragment_files",
    "load_pages",
    "page_stylesheets",
    "resolve_page_count",
]
