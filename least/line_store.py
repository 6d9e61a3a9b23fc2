"""Append-only store of ingested lines.

Owned by the main thread. Lines are kept as tab-expanded text and decoded into
styled spans only when a range is requested for display.
"""

from __future__ import annotations

import logging

from .events import EndOfInput, Event, NewLines, ReaderFailed
from .overstrike import StyledLine, decode_overstrike

logger = logging.getLogger(__name__)


class LineStore:
    def __init__(self) -> None:
        self._lines: list[str] = []
        self.total_count = 0
        self.exhausted = False

    def __len__(self) -> int:
        return len(self._lines)

    def apply(self, event: Event) -> None:
        """Fold one reader event into the store.

        ``ReaderFailed`` re-raises its cause; reader failures are fatal.
        """
        if isinstance(event, NewLines):
            self._lines.extend(event.lines)
            self.total_count = len(self._lines)
            logger.debug("received %d new lines (total %d)", len(event.lines), self.total_count)
            return
        if isinstance(event, EndOfInput):
            self.exhausted = True
            logger.debug("input exhausted after %d lines", self.total_count)
            return
        if isinstance(event, ReaderFailed):
            raise event.cause
        raise TypeError(f"LineStore cannot apply {type(event).__name__}")

    def lines(self, start: int, count: int) -> list[StyledLine]:
        """Return up to ``count`` decoded lines beginning at ``start``.

        Never blocks and never returns more than is currently stored; an
        out-of-range ``start`` or non-positive ``count`` yields ``[]``.
        """
        if count <= 0 or start < 0 or start >= len(self._lines):
            return []
        end = min(len(self._lines), start + count)
        return [decode_overstrike(line) for line in self._lines[start:end]]
