"""Scroll offset bookkeeping for the visible window of lines.

The ceiling ``max_top`` is derived from the line count on every call, so the
offset stays valid while lines keep arriving.
"""

from __future__ import annotations

from collections.abc import Callable

from .keys import Action, GoToLine, Motion


def clamp_top_line(top_line: int, total_count: int, height: int) -> int:
    """Clamp ``top_line`` into ``[0, max(0, total_count - height)]``."""
    max_top = max(0, total_count - height)
    return max(0, min(top_line, max_top))


class Viewport:
    def __init__(self, total_count: Callable[[], int], width: int, height: int) -> None:
        self._total_count = total_count
        self.width = max(1, width)
        self.height = max(1, height)
        self.top_line = 0

    @property
    def max_top(self) -> int:
        return max(0, self._total_count() - self.height)

    @property
    def half_height(self) -> int:
        return self.height // 2

    def _set_top(self, top_line: int) -> None:
        self.top_line = clamp_top_line(top_line, self._total_count(), self.height)

    def scroll_by(self, delta: int) -> None:
        self._set_top(self.top_line + delta)

    def go_to_top(self) -> None:
        self.top_line = 0

    def go_to_bottom(self) -> None:
        self.top_line = self.max_top

    def go_to_line(self, line: int) -> None:
        self._set_top(line)

    def resize(self, width: int, height: int) -> None:
        """Adopt a new terminal size, then re-clamp the offset against it."""
        self.width = max(1, width)
        self.height = max(1, height)
        self._set_top(self.top_line)

    def apply(self, action: Action) -> None:
        """Apply one navigation action. ``Motion.QUIT`` is not handled here."""
        if isinstance(action, GoToLine):
            self.go_to_line(action.line)
        elif action is Motion.SCROLL_UP_ONE:
            self.scroll_by(-1)
        elif action is Motion.SCROLL_DOWN_ONE:
            self.scroll_by(1)
        elif action is Motion.SCROLL_UP_HALF:
            self.scroll_by(-self.half_height)
        elif action is Motion.SCROLL_DOWN_HALF:
            self.scroll_by(self.half_height)
        elif action is Motion.SCROLL_UP_FULL:
            self.scroll_by(-self.height)
        elif action is Motion.SCROLL_DOWN_FULL:
            self.scroll_by(self.height)
        elif action is Motion.GO_TO_TOP:
            self.go_to_top()
        elif action is Motion.GO_TO_BOTTOM:
            self.go_to_bottom()
