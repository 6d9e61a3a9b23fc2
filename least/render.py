"""Frame composition for the pager screen.

Turns styled lines into one ANSI frame clipped to the terminal width and
writes it in a single ``os.write``. Style escapes come from pygments'
console attribute table.
"""

from __future__ import annotations

import os
import unicodedata

from pygments.console import codes

from .overstrike import SpanStyle, StyledLine

STYLE_SGR: dict[SpanStyle, str] = {
    SpanStyle.BOLD: codes["bold"],
    SpanStyle.UNDERLINE: codes["underline"],
}
RESET_SGR = codes["reset"]


def char_display_width(ch: str) -> int:
    """Return terminal column width for one character.

    Combining marks consume no columns, East Asian wide/fullwidth characters
    consume two, and other control characters are shown as one replacement
    cell.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def _visible_char(ch: str) -> str:
    if ch < " " or ch == "\x7f":
        return "�"
    return ch


def render_styled_line(line: StyledLine, max_cols: int) -> str:
    """Render one styled line as ANSI text no wider than ``max_cols``."""
    out: list[str] = []
    col = 0
    for span in line:
        if col >= max_cols:
            break
        sgr = STYLE_SGR.get(span.style, "")
        chunk: list[str] = []
        for ch in span.text:
            ch = _visible_char(ch)
            w = char_display_width(ch)
            if col + w > max_cols:
                col = max_cols
                break
            chunk.append(ch)
            col += w
        if not chunk:
            continue
        if sgr:
            out.append(sgr)
            out.append("".join(chunk))
            out.append(RESET_SGR)
        else:
            out.append("".join(chunk))
    return "".join(out)


def compose_frame(lines: list[StyledLine], width: int, height: int) -> str:
    """Compose a full-screen frame; rows past the last line stay blank."""
    out: list[str] = ["\033[H\033[J"]
    rows: list[str] = []
    for row in range(max(1, height)):
        if row < len(lines):
            rows.append(render_styled_line(lines[row], max(1, width)))
        else:
            rows.append("")
    out.append("\r\n".join(rows))
    return "".join(out)


def write_frame(stdout_fd: int, frame: str) -> None:
    data = frame.encode("utf-8", errors="replace")
    while data:
        written = os.write(stdout_fd, data)
        data = data[written:]
