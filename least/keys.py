"""Vim-style key sequence state machine.

``next_key_state`` is a pure transition from ``(state, key)`` to
``(new_state, action)``. Keys are the normalized tokens produced by
``least.input.read_key``: printable characters as themselves, plus ``"ESC"``,
``"ENTER"`` and named or ``"UNKNOWN"`` escape sequences, which are unbound.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


@dataclass(frozen=True)
class Normal:
    pass


@dataclass(frozen=True)
class WaitingSecondG:
    pass


@dataclass(frozen=True)
class WaitingLineNumber:
    value: int


KeyState = Normal | WaitingSecondG | WaitingLineNumber

NORMAL = Normal()


class Motion(enum.Enum):
    QUIT = "quit"
    SCROLL_UP_ONE = "scroll_up_one"
    SCROLL_DOWN_ONE = "scroll_down_one"
    SCROLL_UP_HALF = "scroll_up_half"
    SCROLL_DOWN_HALF = "scroll_down_half"
    SCROLL_UP_FULL = "scroll_up_full"
    SCROLL_DOWN_FULL = "scroll_down_full"
    GO_TO_TOP = "go_to_top"
    GO_TO_BOTTOM = "go_to_bottom"


@dataclass(frozen=True)
class GoToLine:
    line: int


Action = Motion | GoToLine

NORMAL_KEY_ACTIONS: dict[str, Motion] = {
    "q": Motion.QUIT,
    "ESC": Motion.QUIT,
    "d": Motion.SCROLL_DOWN_HALF,
    "u": Motion.SCROLL_UP_HALF,
    "f": Motion.SCROLL_DOWN_FULL,
    "b": Motion.SCROLL_UP_FULL,
    "j": Motion.SCROLL_DOWN_ONE,
    "k": Motion.SCROLL_UP_ONE,
    "G": Motion.GO_TO_BOTTOM,
}


def _digit_value(key: str) -> int | None:
    if len(key) == 1 and "0" <= key <= "9":
        return ord(key) - ord("0")
    return None


def next_key_state(state: KeyState, key: str) -> tuple[KeyState, Action | None]:
    """Return the next key state and the action triggered by ``key``, if any.

    Unrecognized keys inside a pending sequence abandon it and return to
    ``Normal`` without an action.
    """
    if isinstance(state, WaitingSecondG):
        if key == "g":
            return NORMAL, Motion.GO_TO_TOP
        digit = _digit_value(key)
        if digit is not None:
            return WaitingLineNumber(digit), None
        return NORMAL, None

    if isinstance(state, WaitingLineNumber):
        digit = _digit_value(key)
        if digit is not None:
            return WaitingLineNumber(state.value * 10 + digit), None
        if key == "ENTER":
            return NORMAL, GoToLine(state.value)
        return NORMAL, None

    if key == "g":
        return WaitingSecondG(), None
    return NORMAL, NORMAL_KEY_ACTIONS.get(key)
