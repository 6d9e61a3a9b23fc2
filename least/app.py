"""Pager application: event dispatch and session wiring.

``Pager`` is the single-threaded consumer. It receives one event at a time
from the ``EventChannel``, applies it to the line store, key state, or
viewport, and redraws. ``run_pager`` builds the reader and terminal-input
threads around it and owns the terminal mode for the session.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable

from .config import PagerConfig
from .errors import ReaderCrashed
from .events import (
    Event,
    EventChannel,
    KeyPressed,
    ReaderTerminationObserved,
    TerminalInputFailed,
    TerminalResized,
)
from .input import TerminalInputTask
from .keys import NORMAL, KeyState, Motion, next_key_state
from .line_store import LineStore
from .overstrike import StyledLine
from .reader import ReaderTask
from .render import compose_frame, write_frame
from .source import source_from_paths
from .terminal import TerminalController, open_key_input
from .viewport import Viewport

logger = logging.getLogger(__name__)

DrawCallback = Callable[[list[StyledLine], int, int], None]


class Pager:
    """Owns the line store, key state and viewport for one session."""

    def __init__(
        self,
        channel: EventChannel,
        width: int,
        height: int,
        reader: ReaderTask | None = None,
    ) -> None:
        self.channel = channel
        self.reader = reader
        self.store = LineStore()
        self.viewport = Viewport(lambda: self.store.total_count, width, height)
        self.key_state: KeyState = NORMAL
        self.running = True

    def current_viewport_lines(self) -> list[StyledLine]:
        return self.store.lines(self.viewport.top_line, self.viewport.height)

    def on_key(self, key: str) -> None:
        self.key_state, action = next_key_state(self.key_state, key)
        if action is None:
            return
        if action is Motion.QUIT:
            self.running = False
            return
        self.viewport.apply(action)

    def _reader_crashed(self) -> None:
        cause = self.reader.join() if self.reader is not None else None
        if cause is None:
            raise ReaderCrashed("reader thread terminated unexpectedly")
        raise ReaderCrashed(f"reader thread failed: {cause}") from cause

    def handle_event(self, event: Event) -> None:
        """Apply one event to pager state. Reader and terminal failures raise."""
        if isinstance(event, KeyPressed):
            self.on_key(event.key)
        elif isinstance(event, TerminalResized):
            self.viewport.resize(event.columns, event.rows)
        elif isinstance(event, ReaderTerminationObserved):
            self._reader_crashed()
        elif isinstance(event, TerminalInputFailed):
            raise event.cause
        else:
            self.store.apply(event)

    def redraw(self, draw: DrawCallback) -> None:
        draw(self.current_viewport_lines(), self.viewport.width, self.viewport.height)

    def run(self, draw: DrawCallback) -> None:
        """Draw, then handle events one at a time until a quit key arrives."""
        self.redraw(draw)
        while self.running:
            event = self.channel.recv()
            self.handle_event(event)
            if self.running:
                self.redraw(draw)


def run_pager(config: PagerConfig, stdin_fd: int = 0, stdout_fd: int = 1) -> None:
    """Run an interactive pager session for ``config``.

    Raises ``PagerError`` subclasses for fatal failures after the terminal has
    been restored.
    """
    if len(config.paths) > 1:
        logger.warning(
            "only the last file is displayed; ignoring %s",
            ", ".join(str(path) for path in config.paths[:-1]),
        )
    source = source_from_paths(list(config.paths))
    key_fd, owns_key_fd = open_key_input(stdin_fd)
    try:
        channel = EventChannel()
        reader = ReaderTask(
            source,
            channel.sender("reader"),
            tab_width=config.tab_width,
            flush_interval=config.flush_interval,
            stdin_fd=stdin_fd,
        )
        term = shutil.get_terminal_size((80, 24))
        pager = Pager(channel, width=term.columns, height=term.lines, reader=reader)
        terminal = TerminalController(key_fd, stdout_fd)
        input_task = TerminalInputTask(key_fd, channel.sender("terminal-input"))

        def draw(lines: list[StyledLine], width: int, height: int) -> None:
            write_frame(stdout_fd, compose_frame(lines, width, height))

        with terminal.raw_mode():
            reader.start()
            input_task.start()
            pager.run(draw)
        logger.info("pager closed at line %d of %d", pager.viewport.top_line, pager.store.total_count)
    finally:
        if owns_key_fd:
            os.close(key_fd)
