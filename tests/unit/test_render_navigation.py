from __future__ import annotations

import pytest

from pdf2site.model.job import LeadGatePolicy
from pdf2site.render.gating import GateState, InMemoryGateStore
from pdf2site.render.navigation import (
    FlipbookNavigator,
    NavOutcome,
    ScrollNavigator,
    SlideshowNavigator,
    current_section,
)


def _locked_gate(free_pages: int) -> GateState:
    return GateState(LeadGatePolicy(enabled=True, free_pages=free_pages), InMemoryGateStore(), "site")


def test_slideshow_initial_states_and_buttons() -> None:
    nav = SlideshowNavigator(3)
    assert nav.states() == ["active", "inactive", "inactive"]
    assert nav.prev_disabled
    assert not nav.next_disabled


def test_slideshow_moves_without_wraparound() -> None:
    nav = SlideshowNavigator(3)
    assert nav.prev() is NavOutcome.BLOCKED
    assert nav.next() is NavOutcome.MOVED
    assert nav.next() is NavOutcome.MOVED
    assert nav.states() == ["prev", "prev", "active"]
    assert nav.next_disabled
    assert nav.next() is NavOutcome.BLOCKED
    assert nav.cursor == 2
    assert nav.go_to(0) is NavOutcome.MOVED
    assert nav.states() == ["active", "inactive", "inactive"]


@pytest.mark.parametrize(
    ("key", "outcome", "cursor"),
    [
        ("ArrowRight", NavOutcome.MOVED, 2),
        ("ArrowDown", NavOutcome.MOVED, 2),
        (" ", NavOutcome.MOVED, 2),
        ("ArrowLeft", NavOutcome.MOVED, 0),
        ("ArrowUp", NavOutcome.MOVED, 0),
        ("Enter", NavOutcome.IGNORED, 1),
    ],
)
def test_slideshow_keys(key: str, outcome: NavOutcome, cursor: int) -> None:
    nav = SlideshowNavigator(4)
    nav.go_to(1)
    assert nav.key(key) is outcome
    assert nav.cursor == cursor


def test_slideshow_swipe_threshold() -> None:
    nav = SlideshowNavigator(3)
    assert nav.swipe(200, 150) is NavOutcome.IGNORED  # exactly 50px
    assert nav.swipe(200, 149) is NavOutcome.MOVED
    assert nav.cursor == 1
    assert nav.swipe(100, 151) is NavOutcome.MOVED
    assert nav.cursor == 0


def test_slideshow_gate_redirects_to_form() -> None:
    gate = _locked_gate(2)
    nav = SlideshowNavigator(4, gate)
    assert nav.next() is NavOutcome.MOVED
    assert nav.next() is NavOutcome.GATED
    assert nav.cursor == 1
    gate.unlock()
    assert nav.next() is NavOutcome.MOVED
    assert nav.cursor == 2


def test_flipbook_flip_forward_and_back() -> None:
    nav = FlipbookNavigator(4)
    assert nav.states() == ["unflipped"] * 4
    assert nav.flip_to(3) is NavOutcome.MOVED
    assert nav.states() == ["flipped", "flipped", "flipped", "unflipped"]
    assert nav.flip_to(1) is NavOutcome.MOVED
    assert nav.states() == ["flipped", "unflipped", "unflipped", "unflipped"]
    assert nav.next() is NavOutcome.MOVED
    assert nav.cursor == 2


def test_flipbook_bounds_and_keys() -> None:
    nav = FlipbookNavigator(2)
    assert nav.prev() is NavOutcome.BLOCKED
    assert nav.key("ArrowDown") is NavOutcome.IGNORED
    assert nav.key("ArrowRight") is NavOutcome.MOVED
    assert nav.key("ArrowRight") is NavOutcome.BLOCKED
    assert nav.key("ArrowLeft") is NavOutcome.MOVED
    assert nav.cursor == 0


def test_flipbook_click_leaf() -> None:
    nav = FlipbookNavigator(4)
    assert nav.click_leaf(0) is NavOutcome.MOVED
    assert nav.cursor == 1
    assert nav.click_leaf(1) is NavOutcome.MOVED
    assert nav.states() == ["flipped", "flipped", "unflipped", "unflipped"]
    # clicking a flipped leaf turns it (and any later ones) back
    assert nav.click_leaf(0) is NavOutcome.MOVED
    assert nav.states() == ["unflipped"] * 4
    # the last leaf cannot be turned past the end
    nav.flip_to(3)
    assert nav.click_leaf(3) is NavOutcome.BLOCKED
    assert nav.click_leaf(9) is NavOutcome.BLOCKED


def test_flipbook_gate() -> None:
    nav = FlipbookNavigator(5, _locked_gate(3))
    assert nav.flip_to(2) is NavOutcome.MOVED
    assert nav.next() is NavOutcome.GATED
    assert nav.states() == ["flipped", "flipped", "unflipped", "unflipped", "unflipped"]


def test_current_section() -> None:
    assert current_section([150.0, 900.0]) is None
    assert current_section([-400.0, 80.0, 700.0]) == 1
    assert current_section([-900.0, -300.0, 100.0]) == 2
    assert current_section([], 100.0) is None


def test_scroll_navigator() -> None:
    nav = ScrollNavigator(3, _locked_gate(1))
    assert nav.states() == ["current", "", ""]
    assert nav.current([150.0, 900.0, 1800.0]) == 0
    assert nav.current([-600.0, 40.0, 900.0]) == 1
    assert nav.jump(0) is NavOutcome.MOVED
    assert nav.jump(2) is NavOutcome.GATED
    assert nav.jump(3) is NavOutcome.BLOCKED


def test_single_page_disables_both_buttons() -> None:
    nav = SlideshowNavigator(0)
    assert nav.page_count == 1
    assert nav.prev_disabled and nav.next_disabled
