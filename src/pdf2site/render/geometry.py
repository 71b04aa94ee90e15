"""Hotspot geometry.

Overlays keep the hotspot's percentages as-is so placement follows the page
box at whatever size it renders. No clipping or overlap resolution is done;
document order decides which overlay sits on top.
"""

from __future__ import annotations

from collections.abc import Iterable

from pdf2site.model.job import Hotspot
from pdf2site.pipeline_logger import log_fallback
from pdf2site.render.view import OverlayView


def format_percent(value: float) -> str:
    """Format a percentage with at most four decimals and no trailing zeros."""

    text = f"{value:.4f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def overlay_style(top: float, left: float, width: float, height: float) -> str:
    return (
        f"top: {format_percent(top)}%; left: {format_percent(left)}%; "
        f"width: {format_percent(width)}%; height: {format_percent(height)}%;"
    )


def hotspot_overlay(hotspot: Hotspot) -> OverlayView:
    return OverlayView(
        id=hotspot.id,
        href=hotspot.url,
        title=hotspot.display_label,
        style=overlay_style(hotspot.top, hotspot.left, hotspot.width, hotspot.height),
    )


def hotspots_by_page(hotspots: Iterable[Hotspot], page_count: int) -> dict[int, list[Hotspot]]:
    """Group hotspots by their 0-based page index, preserving input order.

    Hotspots pointing outside ``[0, page_count - 1]`` or carrying non-finite
    geometry are dropped with a warning.
    """

    grouped: dict[int, list[Hotspot]] = {}
    for hotspot in hotspots:
        if not 0 <= hotspot.page_index < page_count:
            log_fallback(
                "Hotspots",
                "page_out_of_range",
                "skip",
                f"id={hotspot.id}, page_index={hotspot.page_index}, page_count={page_count}",
            )
            continue
        if not hotspot.has_finite_geometry:
            log_fallback("Hotspots", "invalid_geometry", "skip", f"id={hotspot.id}")
            continue
        grouped.setdefault(hotspot.page_index, []).append(hotspot)
    return grouped


__all__ = ["format_percent", "hotspot_overlay", "hotspots_by_page", "overlay_style"]
