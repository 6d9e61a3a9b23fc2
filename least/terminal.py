"""Terminal control helpers for the pager session.

Owns raw-mode lifecycle and alternate-screen switching, and locates the tty
to read keys from when standard input carries the paged data.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

from .errors import TerminalUnavailable

TTY_PATH = "/dev/tty"


def open_key_input(stdin_fd: int) -> tuple[int, bool]:
    """Return ``(fd, owned)`` for reading key presses.

    Uses ``stdin_fd`` when it is a terminal, otherwise opens ``/dev/tty``.
    ``owned`` tells the caller whether it must close the descriptor.
    """
    if os.isatty(stdin_fd):
        return stdin_fd, False
    try:
        return os.open(TTY_PATH, os.O_RDONLY), True
    except OSError as exc:
        raise TerminalUnavailable(f"cannot open {TTY_PATH}: {exc.strerror or exc}") from exc


class TerminalController:
    """Manage terminal mode transitions around the pager session."""

    def __init__(self, input_fd: int, stdout_fd: int) -> None:
        """Capture tty state and bind input/output file descriptors."""
        self.input_fd = input_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = termios.tcgetattr(input_fd)

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with the cursor hidden."""
        tty.setraw(self.input_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, b"\x1b[?1049h\x1b[?25l")

    def disable_tui_mode(self) -> None:
        """Show the cursor, leave the alternate screen, restore tty state."""
        os.write(self.stdout_fd, b"\x1b[?25h\x1b[?1049l")
        termios.tcsetattr(self.input_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets code with TUI enter/exit calls."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
