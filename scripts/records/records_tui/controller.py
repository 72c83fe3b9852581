"""Synchronous UI loop: one active screen, one blocking key read at a time."""

from __future__ import annotations

import logging
from typing import Protocol

from rich.console import Console

from records_tui.keys import KeyEvent
from records_tui.models import UpdateSignal
from records_tui.screen import Screen

logger = logging.getLogger(__name__)


class KeySource(Protocol):
    def read_key(self) -> KeyEvent: ...


class Controller:
    def __init__(self, console: Console, keyboard: KeySource) -> None:
        self.console = console
        self.keyboard = keyboard
        self.current_screen: Screen | None = None

    def navigate_to(self, screen: Screen | None) -> UpdateSignal:
        """Mount ``screen`` and feed it keys until it stops the loop."""
        if screen is None:
            raise ValueError("cannot navigate to a missing screen")
        if self.current_screen is not None:
            self.current_screen.dismount(self.console)
        self.current_screen = screen
        screen.mount(self.console)
        return self.await_output()

    def await_output(self) -> UpdateSignal:
        screen = self.current_screen
        if screen is None:
            raise ValueError("no screen mounted")
        while True:
            event = self.keyboard.read_key()
            signal = screen.handle_key(event)
            if not signal.continue_loop:
                logger.debug("screen finished with value=%r target=%r", signal.value, signal.target_id)
                return signal
            screen.refresh(self.console)

    def exit(self) -> None:
        if self.current_screen is not None:
            self.current_screen.dismount(self.console)
            self.current_screen = None
