"""Navigation state machines for the three template variants.

These are the reference semantics of the generated client runtime scripts.
The renderer uses them for the initial state classes it emits; the scripts
under ``templates/runtime`` replay the same transitions in the browser.

All indices are 0-based. Moves outside ``[0, page_count - 1]`` are refused
(``BLOCKED``, no wraparound) and moves into a locked page while the gate is
locked are redirected to the gate form (``GATED``).
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from pdf2site.render.gating import GateState

SWIPE_THRESHOLD_PX = 50
SCROLL_OFFSET_PX = 100.0

FORWARD_KEYS = frozenset({"ArrowRight", "ArrowDown", " "})
BACKWARD_KEYS = frozenset({"ArrowLeft", "ArrowUp"})


class NavOutcome(Enum):
    MOVED = "moved"
    BLOCKED = "blocked"
    GATED = "gated"
    IGNORED = "ignored"


class _CursorNavigator:
    def __init__(self, page_count: int, gate: GateState | None = None) -> None:
        self.page_count = max(1, int(page_count))
        self.gate = gate or GateState.open()
        self.cursor = 0

    def _check(self, index: int) -> NavOutcome | None:
        if index < 0 or index >= self.page_count:
            return NavOutcome.BLOCKED
        if self.gate.blocks(index):
            return NavOutcome.GATED
        return None

    @property
    def prev_disabled(self) -> bool:
        return self.cursor == 0

    @property
    def next_disabled(self) -> bool:
        return self.cursor == self.page_count - 1


class SlideshowNavigator(_CursorNavigator):
    """One page at a time; slides before the cursor are ``prev``."""

    def states(self) -> list[str]:
        result: list[str] = []
        for i in range(self.page_count):
            if i == self.cursor:
                result.append("active")
            elif i < self.cursor:
                result.append("prev")
            else:
                result.append("inactive")
        return result

    def go_to(self, index: int) -> NavOutcome:
        refused = self._check(index)
        if refused is not None:
            return refused
        self.cursor = index
        return NavOutcome.MOVED

    def next(self) -> NavOutcome:
        return self.go_to(self.cursor + 1)

    def prev(self) -> NavOutcome:
        return self.go_to(self.cursor - 1)

    def key(self, key: str) -> NavOutcome:
        if key in FORWARD_KEYS:
            return self.next()
        if key in BACKWARD_KEYS:
            return self.prev()
        return NavOutcome.IGNORED

    def swipe(self, start_x: float, end_x: float) -> NavOutcome:
        diff = start_x - end_x
        if abs(diff) <= SWIPE_THRESHOLD_PX:
            return NavOutcome.IGNORED
        return self.next() if diff > 0 else self.prev()


class FlipbookNavigator(_CursorNavigator):
    """Two-sided leaves; every leaf below the cursor is flipped."""

    def __init__(self, page_count: int, gate: GateState | None = None) -> None:
        super().__init__(page_count, gate)
        self.flipped = [False] * self.page_count

    def states(self) -> list[str]:
        return ["flipped" if f else "unflipped" for f in self.flipped]

    def flip_to(self, index: int) -> NavOutcome:
        refused = self._check(index)
        if refused is not None:
            return refused
        if index > self.cursor:
            for i in range(self.cursor, index):
                self.flipped[i] = True
        else:
            for i in range(index, self.cursor):
                self.flipped[i] = False
        self.cursor = index
        return NavOutcome.MOVED

    def next(self) -> NavOutcome:
        return self.flip_to(self.cursor + 1)

    def prev(self) -> NavOutcome:
        return self.flip_to(self.cursor - 1)

    def click_leaf(self, leaf: int) -> NavOutcome:
        """Turn the clicked leaf: unflipped leaves flip over, flipped ones come back."""
        if not 0 <= leaf < self.page_count:
            return NavOutcome.BLOCKED
        if self.flipped[leaf]:
            return self.flip_to(leaf)
        return self.flip_to(leaf + 1)

    def key(self, key: str) -> NavOutcome:
        if key == "ArrowRight":
            return self.next()
        if key == "ArrowLeft":
            return self.prev()
        return NavOutcome.IGNORED


def current_section(tops: Sequence[float], offset: float = SCROLL_OFFSET_PX) -> int | None:
    """Index of the last section whose top edge is at or above ``offset``."""

    current: int | None = None
    for i, top in enumerate(tops):
        if top <= offset:
            current = i
    return current


class ScrollNavigator:
    """Continuous document: the current section is derived from scroll position."""

    def __init__(self, page_count: int, gate: GateState | None = None) -> None:
        self.page_count = max(1, int(page_count))
        self.gate = gate or GateState.open()

    def states(self) -> list[str]:
        return ["current" if i == 0 else "" for i in range(self.page_count)]

    def current(self, tops: Sequence[float]) -> int:
        """Highlighted section; the first one until any section reaches the offset."""
        found = current_section(tops)
        return 0 if found is None else found

    def jump(self, index: int) -> NavOutcome:
        if index < 0 or index >= self.page_count:
            return NavOutcome.BLOCKED
        if self.gate.blocks(index):
            return NavOutcome.GATED
        return NavOutcome.MOVED


__all__ = [
    "BACKWARD_KEYS",
    "FORWARD_KEYS",
    "FlipbookNavigator",
    "NavOutcome",
    "SCROLL_OFFSET_PX",
    "SWIPE_THRESHOLD_PX",
    "ScrollNavigator",
    "SlideshowNavigator",
    "current_section",
]
