from __future__ import annotations

import pytest

from dcm.ui.tui.state.events import InteractiveRects, KeyPress, Rect, list_row_at, tab_at


def test_rect_contains_is_half_open() -> None:
    rect = Rect(2, 3, 4, 2)

    assert rect.contains(2, 3)
    assert rect.contains(5, 4)
    assert not rect.contains(6, 4)
    assert not rect.contains(5, 5)
    assert not rect.contains(1, 3)


def test_interactive_rects_default_to_not_drawn() -> None:
    rects = InteractiveRects()

    assert rects.select_config_button is None
    assert rects.file_list is None
    assert rects.tabs is None
    assert rects.config_list is None


@pytest.mark.parametrize(
    ("x", "expected"),
    [
        (0, None),   # left border
        (1, 0),
        (4, 0),      # " AB " spans 1..4
        (5, None),   # divider
        (6, 1),
        (10, 1),     # " CDE " spans 6..10
        (11, None),
        (12, None),  # past the last tab
    ],
)
def test_tab_at(x: int, expected) -> None:
    assert tab_at(Rect(0, 0, 40, 3), x, ["AB", "CDE"]) == expected


def test_tab_at_offset_rect() -> None:
    assert tab_at(Rect(10, 0, 40, 3), 11, ["AB"]) == 0
    assert tab_at(Rect(10, 0, 40, 3), 10, ["AB"]) is None


def test_list_row_at() -> None:
    rect = Rect(0, 5, 20, 10)

    assert list_row_at(rect, 5, 0) is None
    assert list_row_at(rect, 6, 0) == 0
    assert list_row_at(rect, 9, 0) == 3
    assert list_row_at(rect, 9, 4) == 7


@pytest.mark.parametrize(
    ("character", "printable"),
    [("a", True), (" ", True), ("\x1b", False), (None, False), ("ab", False)],
)
def test_key_press_printable(character, printable: bool) -> None:
    assert KeyPress(key="x", character=character).is_printable is printable
