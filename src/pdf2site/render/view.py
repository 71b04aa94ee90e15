"""Typed document model handed to the templates.

The renderer builds these views from a job and the templates serialize them
in one pass with autoescaping on, so free text is escaped in a single place.
Only page fragments (already-rendered markup) are wrapped in ``Markup``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from markupsafe import Markup


@dataclass(frozen=True, slots=True)
class OverlayView:
    id: str
    href: str
    title: str
    style: str


@dataclass(frozen=True, slots=True)
class PageView:
    index: int  # 0-based, used by hotspots, gate and runtime
    number: int  # 1-based, displayed
    body: Markup
    is_placeholder: bool = False
    overlays: tuple[OverlayView, ...] = ()
    locked: bool = False
    state: str = ""
    z_index: int = 0

    @property
    def anchor(self) -> str:
        return f"page-{self.number}"


@dataclass(frozen=True, slots=True)
class GateFieldView:
    name: str
    type: str
    placeholder: str
    required: bool


@dataclass(frozen=True, slots=True)
class GateView:
    heading: str
    message: str
    submit_label: str
    fields: tuple[GateFieldView, ...]


@dataclass(frozen=True, slots=True)
class SeoView:
    description: str
    keywords: tuple[str, ...]
    author: str | None
    url: str | None
    schema: dict[str, Any]


@dataclass(frozen=True)
class SiteView:
    title: str
    template: str
    page_count: int
    pages: tuple[PageView, ...]
    stylesheets: tuple[str, ...]
    script: str
    gate: GateView | None = None
    seo: SeoView | None = None
    nav: dict[str, Any] = field(default_factory=dict)

    def as_context(self) -> dict[str, Any]:
        return {
            "site": self,
            "title": self.title,
            "pages": self.pages,
            "gate": self.gate,
            "seo": self.seo,
            "nav": self.nav,
        }


__all__ = [
    "GateFieldView",
    "GateView",
    "OverlayView",
    "PageView",
    "SeoView",
    "SiteView",
]
