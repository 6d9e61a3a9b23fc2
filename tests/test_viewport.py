"""Viewport scrolling and clamping tests."""

from __future__ import annotations

import unittest

from least.keys import GoToLine, Motion
from least.viewport import Viewport, clamp_top_line


class Counter:
    def __init__(self, total: int) -> None:
        self.total = total

    def __call__(self) -> int:
        return self.total


def make_viewport(total: int, height: int = 10, width: int = 80) -> tuple[Viewport, Counter]:
    counter = Counter(total)
    return Viewport(counter, width=width, height=height), counter


class ViewportScrollTests(unittest.TestCase):
    def test_full_screen_scrolling_stops_at_max_top(self) -> None:
        viewport, _ = make_viewport(100)
        for _ in range(10):
            viewport.apply(Motion.SCROLL_DOWN_FULL)
        self.assertEqual(viewport.top_line, 90)
        self.assertEqual(viewport.max_top, 90)
        viewport.apply(Motion.SCROLL_DOWN_FULL)
        self.assertEqual(viewport.top_line, 90)

    def test_line_and_half_screen_steps(self) -> None:
        viewport, _ = make_viewport(100, height=11)
        viewport.apply(Motion.SCROLL_DOWN_ONE)
        self.assertEqual(viewport.top_line, 1)
        viewport.apply(Motion.SCROLL_DOWN_HALF)
        self.assertEqual(viewport.top_line, 6)
        viewport.apply(Motion.SCROLL_UP_HALF)
        self.assertEqual(viewport.top_line, 1)
        viewport.apply(Motion.SCROLL_UP_ONE)
        viewport.apply(Motion.SCROLL_UP_ONE)
        self.assertEqual(viewport.top_line, 0)

    def test_full_screen_up_clamps_at_zero(self) -> None:
        viewport, _ = make_viewport(100)
        viewport.apply(Motion.SCROLL_DOWN_FULL)
        viewport.apply(Motion.SCROLL_UP_FULL)
        viewport.apply(Motion.SCROLL_UP_FULL)
        self.assertEqual(viewport.top_line, 0)

    def test_top_and_bottom_are_idempotent(self) -> None:
        viewport, _ = make_viewport(50)
        viewport.apply(Motion.GO_TO_BOTTOM)
        self.assertEqual(viewport.top_line, 40)
        viewport.apply(Motion.GO_TO_BOTTOM)
        self.assertEqual(viewport.top_line, 40)
        viewport.apply(Motion.GO_TO_TOP)
        viewport.apply(Motion.GO_TO_TOP)
        self.assertEqual(viewport.top_line, 0)

    def test_go_to_line_clamps(self) -> None:
        viewport, _ = make_viewport(50)
        viewport.apply(GoToLine(12))
        self.assertEqual(viewport.top_line, 12)
        viewport.apply(GoToLine(1000))
        self.assertEqual(viewport.top_line, 40)

    def test_short_store_pins_offset_to_zero(self) -> None:
        viewport, _ = make_viewport(3)
        for action in (Motion.SCROLL_DOWN_ONE, Motion.SCROLL_DOWN_FULL, Motion.GO_TO_BOTTOM, GoToLine(2)):
            viewport.apply(action)
            self.assertEqual(viewport.top_line, 0)

    def test_ceiling_follows_growing_store(self) -> None:
        viewport, counter = make_viewport(5)
        viewport.apply(Motion.GO_TO_BOTTOM)
        self.assertEqual(viewport.top_line, 0)
        counter.total = 30
        viewport.apply(Motion.GO_TO_BOTTOM)
        self.assertEqual(viewport.top_line, 20)

    def test_quit_does_not_move_viewport(self) -> None:
        viewport, _ = make_viewport(100)
        viewport.apply(Motion.SCROLL_DOWN_ONE)
        viewport.apply(Motion.QUIT)
        self.assertEqual(viewport.top_line, 1)


class ViewportResizeTests(unittest.TestCase):
    def test_growing_height_reclamps_offset(self) -> None:
        viewport, _ = make_viewport(100)
        viewport.apply(Motion.GO_TO_BOTTOM)
        viewport.resize(120, 40)
        self.assertEqual((viewport.width, viewport.height), (120, 40))
        self.assertEqual(viewport.top_line, 60)

    def test_shrinking_keeps_offset(self) -> None:
        viewport, _ = make_viewport(100)
        viewport.apply(GoToLine(30))
        viewport.resize(80, 5)
        self.assertEqual(viewport.top_line, 30)

    def test_dimensions_are_at_least_one(self) -> None:
        viewport, _ = make_viewport(10)
        viewport.resize(0, 0)
        self.assertEqual((viewport.width, viewport.height), (1, 1))


class ClampPropertyTests(unittest.TestCase):
    def test_clamp_stays_in_range_for_all_small_inputs(self) -> None:
        for total in range(0, 15):
            for height in range(1, 8):
                for top in range(-3, 20):
                    clamped = clamp_top_line(top, total, height)
                    self.assertGreaterEqual(clamped, 0)
                    self.assertLessEqual(clamped, max(0, total - height))

    def test_every_motion_respects_bounds(self) -> None:
        for total in (0, 1, 9, 10, 11, 37):
            for height in (1, 2, 10):
                viewport, _ = make_viewport(total, height=height)
                for action in list(Motion) + [GoToLine(0), GoToLine(5), GoToLine(99)]:
                    viewport.apply(action)
                    self.assertGreaterEqual(viewport.top_line, 0)
                    self.assertLessEqual(viewport.top_line, max(0, total - height))


if __name__ == "__main__":
    unittest.main()
