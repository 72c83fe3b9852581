"""Keypress model and decoding of raw terminal input."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Key(Enum):
    CHAR = "char"
    ENTER = "enter"
    BACKSPACE = "backspace"
    SPACE = "space"
    ARROW_UP = "up"
    ARROW_DOWN = "down"
    ARROW_LEFT = "left"
    ARROW_RIGHT = "right"
    ESCAPE = "escape"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class KeyEvent:
    key: Key
    char: str = ""

    @classmethod
    def of_char(cls, char: str) -> "KeyEvent":
        return cls(Key.CHAR, char)

    @property
    def is_printable(self) -> bool:
        return self.key in (Key.CHAR, Key.SPACE) and len(self.char) == 1 and self.char.isprintable()


ESCAPE_SEQUENCES: dict[str, Key] = {
    "\x1b[A": Key.ARROW_UP,
    "\x1bOA": Key.ARROW_UP,
    "\x1b[B": Key.ARROW_DOWN,
    "\x1bOB": Key.ARROW_DOWN,
    "\x1b[C": Key.ARROW_RIGHT,
    "\x1bOC": Key.ARROW_RIGHT,
    "\x1b[D": Key.ARROW_LEFT,
    "\x1bOD": Key.ARROW_LEFT,
}

ENTER_CHARS = {"\r", "\n"}
BACKSPACE_CHARS = {"\x7f", "\x08"}


def decode(data: str) -> KeyEvent:
    """Map one raw read (a single char or an escape sequence) to a KeyEvent."""
    if not data:
        return KeyEvent(Key.UNKNOWN)
    if data in ESCAPE_SEQUENCES:
        return KeyEvent(ESCAPE_SEQUENCES[data])
    if data == "\x1b":
        return KeyEvent(Key.ESCAPE)
    if data.startswith("\x1b"):
        return KeyEvent(Key.UNKNOWN, data)
    if data in ENTER_CHARS:
        return KeyEvent(Key.ENTER)
    if data in BACKSPACE_CHARS:
        return KeyEvent(Key.BACKSPACE)
    if data == " ":
        return KeyEvent(Key.SPACE, " ")
    if len(data) == 1 and data.isprintable():
        return KeyEvent.of_char(data)
    return KeyEvent(Key.UNKNOWN, data)
