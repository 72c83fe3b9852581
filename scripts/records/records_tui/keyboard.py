"""Blocking keyboard reader over a termios cbreak-mode stdin."""

from __future__ import annotations

import codecs
import logging
import os
import select
import sys
import termios

from records_tui.keys import KeyEvent, decode

logger = logging.getLogger(__name__)

# Wait this long for the rest of an escape sequence before treating ESC as a key.
ESCAPE_TIMEOUT_SECONDS = 0.05
MAX_SEQUENCE_LENGTH = 8


class KeyboardReader:
    """Owns the terminal input mode for the whole session.

    Opening switches stdin to non-canonical, no-echo mode (signals stay
    enabled so Ctrl+C still raises KeyboardInterrupt); closing restores the
    saved attributes. Use it as a context manager so every exit path
    restores the terminal.
    """

    def __init__(self, fd: int | None = None) -> None:
        self.fd = sys.stdin.fileno() if fd is None else fd
        self._old_settings: list | None = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    @property
    def is_open(self) -> bool:
        return self._old_settings is not None

    def open(self) -> None:
        if self.is_open:
            return
        old = termios.tcgetattr(self.fd)
        new = termios.tcgetattr(self.fd)
        new[3] &= ~(termios.ICANON | termios.ECHO)
        new[6][termios.VMIN] = 1
        new[6][termios.VTIME] = 0
        termios.tcsetattr(self.fd, termios.TCSADRAIN, new)
        self._old_settings = old
        logger.debug("keyboard opened on fd %s", self.fd)

    def close(self) -> None:
        if self._old_settings is None:
            return
        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self._old_settings)
        finally:
            self._old_settings = None
            logger.debug("keyboard closed")

    def __enter__(self) -> "KeyboardReader":
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def read_key(self) -> KeyEvent:
        """Block until one key is pressed and return it."""
        first = self._read_char()
        if first != "\x1b":
            return decode(first)

        sequence = first
        while len(sequence) < MAX_SEQUENCE_LENGTH and self._pending_input():
            sequence += self._read_char()
            if len(sequence) >= 3 and (sequence[-1].isalpha() or sequence[-1] == "~"):
                break
        return decode(sequence)

    def _read_char(self) -> str:
        while True:
            data = os.read(self.fd, 1)
            if not data:
                raise EOFError("keyboard input closed")
            text = self._decoder.decode(data)
            if text:
                return text

    def _pending_input(self) -> bool:
        ready, _, _ = select.select([self.fd], [], [], ESCAPE_TIMEOUT_SECONDS)
        return bool(ready)
