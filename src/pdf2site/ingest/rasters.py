"""Raster page import.

Turns page images rendered by an external rasterizer (or the browser) into
a Page Store: ``assets/pageN.png`` plus a ``pages/pageN.html`` wrapper per
page. The wrapper's ``<img>`` carries the intrinsic size so the page box
keeps the source aspect ratio and hotspot percentages stay aligned.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
import re
from collections.abc import Callable, Sequence
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from pdf2site.ingest.page_store import ASSETS_DIRNAME, PAGE_STYLES, PAGES_DIRNAME
from pdf2site.render.templating import Templates, default_templates

logger = logging.getLogger(__name__)

ImageSource = Path | bytes | str
ProgressCallback = Callable[[str, dict[str, int | str]], None] | None

_DATA_URL_RE = re.compile(r"^data:image/[\w.+-]+;base64,", re.IGNORECASE)


class RasterImportError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class RasterPage:
    number: int  # 1-based
    image_path: Path
    fragment_path: Path
    width: int
    height: int


def _safe_emit(on_progress: ProgressCallback, event: str, payload: dict[str, int | str]) -> None:
    if on_progress is None:
        return
    with suppress(Exception):
        on_progress(event, payload)


def decode_image_source(source: ImageSource) -> bytes:
    """Read image bytes from a path, raw bytes, or a (data URL) base64 string."""

    if isinstance(source, Path):
        return source.read_bytes()
    if isinstance(source, bytes | bytearray):
        return bytes(source)
    payload = _DATA_URL_RE.sub("", source.strip())
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise RasterImportError("Image string is neither a data URL nor base64") from exc


def _open_image(data: bytes, number: int) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(data))
        image.load()
    except (UnidentifiedImageError, OSError) as exc:
        raise RasterImportError(f"Page {number}: unreadable image data") from exc
    if image.mode not in ("RGB", "RGBA", "L", "LA", "P"):
        image = image.convert("RGBA")
    return image


def import_page_images(
    images: Sequence[ImageSource],
    site_dir: Path,
    title: str,
    *,
    templates: Templates | None = None,
    on_progress: ProgressCallback = None,
) -> list[RasterPage]:
    """Write one PNG and one HTML wrapper per page image, in order.

    Raises:
        RasterImportError: If an image cannot be decoded
    """

    templates = templates or default_templates()
    pages_dir = site_dir / PAGES_DIRNAME
    assets_dir = site_dir / ASSETS_DIRNAME
    pages_dir.mkdir(parents=True, exist_ok=True)
    assets_dir.mkdir(parents=True, exist_ok=True)

    _safe_emit(on_progress, "import:start", {"page_count": len(images)})
    results: list[RasterPage] = []
    for number, source in enumerate(images, start=1):
        image = _open_image(decode_image_source(source), number)
        image_name = f"page{number}.png"
        image_path = assets_dir / image_name
        image.save(image_path, format="PNG")

        width, height = image.size
        fragment_path = pages_dir / f"page{number}.html"
        fragment_path.write_text(
            templates.render(
                "page_wrapper.html",
                {
                    "title": title or "Page",
                    "number": number,
                    "image": image_name,
                    "width": width,
                    "height": height,
                },
            ),
            encoding="utf-8",
        )
        results.append(
            RasterPage(
                number=number,
                image_path=image_path,
                fragment_path=fragment_path,
                width=width,
                height=height,
            )
        )
        _safe_emit(on_progress, "page:imported", {"page_no": number})

    (site_dir / PAGE_STYLES).write_text(templates.render_static("styles/pages.css"), encoding="utf-8")
    logger.info("Imported %d page images into %s", len(results), site_dir)
    _safe_emit(on_progress, "import:finalized", {"pages": len(results)})
    return results


__all__ = ["RasterImportError", "RasterPage", "decode_image_source", "import_page_images"]
