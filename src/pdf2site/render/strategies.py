"""Per-variant layout strategies.

All variants share the same data handling (fragment placement, hotspot
overlays, gate marking). A strategy only carries what differs: the page
template, the runtime script, the stylesheet, the navigation state machine
and the gate copy.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from pdf2site.model.job import TemplateKind
from pdf2site.render.gating import GateState
from pdf2site.render.navigation import FlipbookNavigator, ScrollNavigator, SlideshowNavigator

Navigator = SlideshowNavigator | FlipbookNavigator | ScrollNavigator


@dataclass(frozen=True)
class GateCopy:
    heading: str
    message: str  # may contain {pages}
    submit_label: str


@dataclass(frozen=True)
class LayoutStrategy:
    kind: TemplateKind
    template_name: str
    script_template: str
    script_path: str
    stylesheet_template: str
    stylesheet_path: str
    gate_copy: GateCopy
    navigator_factory: Callable[[int, GateState | None], Navigator]
    has_nav_buttons: bool = True

    def navigator(self, page_count: int, gate: GateState | None = None) -> Navigator:
        return self.navigator_factory(page_count, gate)

    def initial_states(self, page_count: int) -> list[str]:
        return self.navigator(page_count).states()

    def initial_buttons(self, page_count: int) -> dict[str, bool]:
        """Disabled state of the prev/next buttons on first load; empty without buttons."""
        if not self.has_nav_buttons:
            return {}
        nav = self.navigator(page_count)
        assert not isinstance(nav, ScrollNavigator)
        return {"prev_disabled": nav.prev_disabled, "next_disabled": nav.next_disabled}


SLIDESHOW = LayoutStrategy(
    kind=TemplateKind.PRESENTATION,
    template_name="presentation.html",
    script_template="runtime/presentation.js",
    script_path="js/navigation.js",
    stylesheet_template="styles/presentation.css",
    stylesheet_path="assets/presentation.css",
    gate_copy=GateCopy(
        heading="Unlock Full Access",
        message="Fill in your details to view all {pages} pages",
        submit_label="Get Access",
    ),
    navigator_factory=SlideshowNavigator,
)

FLIPBOOK = LayoutStrategy(
    kind=TemplateKind.FLIPBOOK,
    template_name="flipbook.html",
    script_template="runtime/flipbook.js",
    script_path="js/flipbook.js",
    stylesheet_template="styles/flipbook.css",
    stylesheet_path="assets/flipbook.css",
    gate_copy=GateCopy(
        heading="Continue Reading",
        message="Enter your details to unlock all {pages} pages",
        submit_label="Unlock Now",
    ),
    navigator_factory=FlipbookNavigator,
)

SCROLL_DOC = LayoutStrategy(
    kind=TemplateKind.DOCUMENTATION,
    template_name="documentation.html",
    script_template="runtime/documentation.js",
    script_path="js/documentation.js",
    stylesheet_template="styles/documentation.css",
    stylesheet_path="assets/documentation.css",
    gate_copy=GateCopy(
        heading="Get Full Access",
        message="Enter your details to unlock all {pages} pages",
        submit_label="Unlock Content",
    ),
    navigator_factory=ScrollNavigator,
    has_nav_buttons=False,
)

STRATEGIES: dict[TemplateKind, LayoutStrategy] = {
    s.kind: s for s in (SLIDESHOW, FLIPBOOK, SCROLL_DOC)
}


def strategy_for(kind: TemplateKind | str) -> LayoutStrategy:
    return STRATEGIES[TemplateKind.resolve(kind)]


__all__ = [
    "FLIPBOOK",
    "GateCopy",
    "LayoutStrategy",
    "SCROLL_DOC",
    "SLIDESHOW",
    "STRATEGIES",
    "strategy_for",
]
