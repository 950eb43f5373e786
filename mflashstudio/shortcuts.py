"""Keyboard shortcut descriptions such as ``"Ctrl+Shift+Tab"``."""

from __future__ import annotations

import string
from dataclasses import dataclass
from enum import Enum


class Key(Enum):
    """A key that can be bound to a shortcut."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    F = "F"
    G = "G"
    H = "H"
    I = "I"  # noqa: E741
    J = "J"
    K = "K"
    L = "L"
    M = "M"
    N = "N"
    O = "O"  # noqa: E741
    P = "P"
    Q = "Q"
    R = "R"
    S = "S"
    T = "T"
    U = "U"
    V = "V"
    W = "W"
    X = "X"
    Y = "Y"
    Z = "Z"

    NUM0 = "Num0"
    NUM1 = "Num1"
    NUM2 = "Num2"
    NUM3 = "Num3"
    NUM4 = "Num4"
    NUM5 = "Num5"
    NUM6 = "Num6"
    NUM7 = "Num7"
    NUM8 = "Num8"
    NUM9 = "Num9"

    COMMA = "Comma"
    PERIOD = "Period"
    EQUALS = "Equals"
    MINUS = "Minus"

    ENTER = "Enter"
    ESCAPE = "Escape"
    SPACE = "Space"
    TAB = "Tab"
    BACKSPACE = "Backspace"
    DELETE = "Delete"

    ARROW_UP = "ArrowUp"
    ARROW_DOWN = "ArrowDown"
    ARROW_LEFT = "ArrowLeft"
    ARROW_RIGHT = "ArrowRight"

    HOME = "Home"
    END = "End"
    PAGE_UP = "PageUp"
    PAGE_DOWN = "PageDown"

    F1 = "F1"
    F2 = "F2"
    F3 = "F3"
    F4 = "F4"
    F5 = "F5"
    F6 = "F6"
    F7 = "F7"
    F8 = "F8"
    F9 = "F9"
    F10 = "F10"
    F11 = "F11"
    F12 = "F12"


@dataclass(frozen=True)
class Modifiers:
    """Modifier keys held with a shortcut; ``command`` is Ctrl or Cmd."""

    command: bool = False
    shift: bool = False
    alt: bool = False


@dataclass(frozen=True)
class KeyboardShortcut:
    """A key together with the modifiers that must be held."""

    modifiers: Modifiers
    key: Key


_MODIFIER_NAMES: dict[str, str] = {
    "ctrl": "command",
    "cmd": "command",
    "command": "command",
    "shift": "shift",
    "alt": "alt",
    "option": "alt",
}


def _key_table() -> dict[str, Key]:
    table: dict[str, Key] = {letter: Key[letter.upper()] for letter in string.ascii_lowercase}
    for digit in string.digits:
        key = Key[f"NUM{digit}"]
        table[digit] = key
        table[f"num{digit}"] = key
    for number in range(1, 13):
        table[f"f{number}"] = Key[f"F{number}"]
    aliases: dict[Key, tuple[str, ...]] = {
        Key.COMMA: (",", "comma"),
        Key.PERIOD: (".", "period"),
        Key.EQUALS: ("plus", "+", "="),
        Key.MINUS: ("minus", "-"),
        Key.ENTER: ("enter", "return"),
        Key.ESCAPE: ("escape", "esc"),
        Key.SPACE: ("space",),
        Key.TAB: ("tab",),
        Key.BACKSPACE: ("backspace",),
        Key.DELETE: ("delete", "del"),
        Key.ARROW_UP: ("arrowup", "up"),
        Key.ARROW_DOWN: ("arrowdown", "down"),
        Key.ARROW_LEFT: ("arrowleft", "left"),
        Key.ARROW_RIGHT: ("arrowright", "right"),
        Key.HOME: ("home",),
        Key.END: ("end",),
        Key.PAGE_UP: ("pageup",),
        Key.PAGE_DOWN: ("pagedown",),
    }
    for key, names in aliases.items():
        for name in names:
            table[name] = key
    return table


_KEYS = _key_table()


def parse_shortcut(text: str) -> KeyboardShortcut | None:
    """Parse a ``+``-separated shortcut, case-insensitively.

    Returns ``None`` when any part is unknown or no key is given. When
    several keys are named, the last one wins.
    """
    flags = {"command": False, "shift": False, "alt": False}
    key: Key | None = None

    for raw_part in text.split("+"):
        part = raw_part.strip().lower()
        if part in _MODIFIER_NAMES:
            flags[_MODIFIER_NAMES[part]] = True
        elif part in _KEYS:
            key = _KEYS[part]
        else:
            return None

    if key is None:
        return None
    return KeyboardShortcut(Modifiers(**flags), key)