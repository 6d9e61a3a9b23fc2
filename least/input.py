"""Low-level terminal input decoding and the terminal-input thread.

``read_key`` reads raw bytes from the tty and translates them into normalized
key tokens. ``TerminalInputTask`` forwards those tokens, plus terminal size
changes noticed while idle, to the main loop.
"""

from __future__ import annotations

import logging
import os
import select
import shutil
import threading
from collections.abc import Callable

from .errors import TerminalInputError
from .events import EventSender, KeyPressed, TerminalInputFailed, TerminalResized

logger = logging.getLogger(__name__)

ESC_SEQUENCE_TIMEOUT_MS = 25
INPUT_POLL_TIMEOUT_MS = 120
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS = {
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\x15": "CTRL_U",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER_CR",
    b"\n": "ENTER_LF",
}

_CSI_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

_CSI_TILDE_KEYS = {
    b"1": "HOME",
    b"4": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
}

# Token for escape sequences without a name of their own. Never "ESC".
UNKNOWN_KEY = "UNKNOWN"
_CSI_MAX_PARAMS = 16


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``.

    Returns ``""`` when ``timeout_ms`` elapses without input. Raises
    ``EOFError`` when the terminal has been closed.
    """
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            raise EOFError("terminal input closed")

    if ch in _CONTROL_KEYS:
        return _CONTROL_KEYS[ch]

    if ch != b"\x1b":
        expected = _utf8_length(ch[0])
        while len(ch) < expected:
            more = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
            if more is None:
                break
            ch += more
        return ch.decode("utf-8", errors="replace")

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"\x1b":
        _PENDING_BYTES.append(seq)
        return "ESC"
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        # SS3: function keys and application-mode arrows carry one final byte.
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        return _CSI_KEYS.get(final, UNKNOWN_KEY) if final is not None else UNKNOWN_KEY
    # Meta/Alt chord; the paired byte belongs to it.
    return UNKNOWN_KEY


def _read_csi(fd: int) -> str:
    """Consume a CSI sequence through its final byte and name it."""
    params = b""
    while len(params) < _CSI_MAX_PARAMS:
        ch = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if ch is None:
            return UNKNOWN_KEY
        if 0x40 <= ch[0] <= 0x7E:
            if not params:
                return _CSI_KEYS.get(ch, UNKNOWN_KEY)
            if ch == b"~":
                return _CSI_TILDE_KEYS.get(params, UNKNOWN_KEY)
            return UNKNOWN_KEY
        params += ch
    return UNKNOWN_KEY


def _current_terminal_size() -> tuple[int, int]:
    size = shutil.get_terminal_size((80, 24))
    return size.columns, size.lines


class TerminalInputTask:
    """Block on terminal input and forward key and resize events.

    Carriage return and line feed both become ``"ENTER"``; a line feed that
    directly follows a carriage return is dropped.
    """

    def __init__(
        self,
        fd: int,
        sender: EventSender,
        *,
        terminal_size: Callable[[], tuple[int, int]] = _current_terminal_size,
        poll_timeout_ms: int = INPUT_POLL_TIMEOUT_MS,
    ) -> None:
        self.fd = fd
        self._sender = sender
        self._terminal_size = terminal_size
        self.poll_timeout_ms = poll_timeout_ms
        self._last_size = terminal_size()

    def start(self) -> threading.Thread:
        thread = threading.Thread(target=self._run_guarded, name="least-terminal-input", daemon=True)
        thread.start()
        return thread

    def _run_guarded(self) -> None:
        try:
            self.run()
        finally:
            self._sender.close()

    def _check_resize(self) -> None:
        size = self._terminal_size()
        if size != self._last_size:
            self._last_size = size
            self._sender.send(TerminalResized(columns=size[0], rows=size[1]))

    def run(self) -> None:
        skip_next_lf = False
        while True:
            try:
                key = read_key(self.fd, timeout_ms=self.poll_timeout_ms)
            except EOFError:
                logger.info("terminal input closed")
                return
            except OSError as exc:
                logger.error("terminal input failed: %s", exc)
                cause = TerminalInputError(f"terminal input failed: {exc.strerror or exc}")
                cause.__cause__ = exc
                self._sender.send(TerminalInputFailed(cause))
                return
            if key == "":
                self._check_resize()
                continue
            if skip_next_lf and key == "ENTER_LF":
                skip_next_lf = False
                continue
            skip_next_lf = key == "ENTER_CR"
            if key in {"ENTER_CR", "ENTER_LF"}:
                key = "ENTER"
            self._sender.send(KeyPressed(key))
