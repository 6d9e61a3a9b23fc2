"""Backspace overstrike decoding for man/groff style text.

``c\\bc`` renders ``c`` bold and ``_\\bc`` renders ``c`` underlined. Any other
backspace usage is kept literally. Decoding never fails: invalid UTF-8 is
replaced and unrecognized sequences degrade to plain text.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

BACKSPACE = "\b"


class SpanStyle(enum.Enum):
    NONE = "none"
    BOLD = "bold"
    UNDERLINE = "underline"


@dataclass(frozen=True)
class Span:
    """A run of text sharing one style."""

    text: str
    style: SpanStyle = SpanStyle.NONE


StyledLine = tuple[Span, ...]


@dataclass(frozen=True)
class _Idle:
    pass


@dataclass(frozen=True)
class _PendingChar:
    char: str


@dataclass(frozen=True)
class _PendingCharBackspace:
    char: str


_RecognizerState = _Idle | _PendingChar | _PendingCharBackspace
_IDLE = _Idle()


def _step(state: _RecognizerState, ch: str) -> tuple[_RecognizerState, tuple[tuple[str, SpanStyle], ...]]:
    """Advance the recognizer by one character.

    Returns the next state plus the ``(char, style)`` pairs it emits.
    """
    if isinstance(state, _PendingChar):
        if ch == BACKSPACE:
            return _PendingCharBackspace(state.char), ()
        return _PendingChar(ch), ((state.char, SpanStyle.NONE),)
    if isinstance(state, _PendingCharBackspace):
        prev = state.char
        if ch == prev:
            return _IDLE, ((ch, SpanStyle.BOLD),)
        if prev == "_":
            return _IDLE, ((ch, SpanStyle.UNDERLINE),)
        return _IDLE, ((prev, SpanStyle.NONE), (ch, SpanStyle.NONE))
    return _PendingChar(ch), ()


def _flush(state: _RecognizerState) -> tuple[tuple[str, SpanStyle], ...]:
    # A dangling backspace at end of line is dropped; its character stays.
    if isinstance(state, (_PendingChar, _PendingCharBackspace)):
        return ((state.char, SpanStyle.NONE),)
    return ()


class _SpanBuilder:
    def __init__(self) -> None:
        self.spans: list[Span] = []
        self._chars: list[str] = []
        self._style: SpanStyle | None = None

    def push(self, ch: str, style: SpanStyle) -> None:
        if style is not self._style:
            self._close()
            self._style = style
        self._chars.append(ch)

    def _close(self) -> None:
        if self._chars and self._style is not None:
            self.spans.append(Span("".join(self._chars), self._style))
        self._chars = []

    def finish(self) -> StyledLine:
        self._close()
        return tuple(self.spans)


def decode_overstrike(raw_line: bytes | str) -> StyledLine:
    """Decode one line into styled spans.

    ``bytes`` input is decoded as UTF-8 with replacement first. Adjacent
    characters of equal style are merged into a single ``Span``.
    """
    if isinstance(raw_line, bytes):
        text = raw_line.decode("utf-8", errors="replace")
    else:
        text = raw_line
    if BACKSPACE not in text:
        return (Span(text),) if text else ()

    builder = _SpanBuilder()
    state: _RecognizerState = _IDLE
    for ch in text:
        state, emitted = _step(state, ch)
        for out_ch, style in emitted:
            builder.push(out_ch, style)
    for out_ch, style in _flush(state):
        builder.push(out_ch, style)
    return builder.finish()


def plain_text(line: StyledLine) -> str:
    """Return the visible text of a styled line without style information."""
    return "".join(span.text for span in line)


__all__ = [
    "BACKSPACE",
    "Span",
    "SpanStyle",
    "StyledLine",
    "decode_overstrike",
    "plain_text",
]
