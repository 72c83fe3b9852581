"""Vertical option menu: arrows move, Enter selects."""

from __future__ import annotations

from typing import Sequence

from rich.console import Console
from rich.text import Text

from records_tui.keys import Key, KeyEvent
from records_tui.models import UpdateSignal
from records_tui.palette import ORANGE

MINIMUM_OPTIONS = 2
INDICATOR = "->"


class Menu:
    def __init__(self, options: Sequence[str]) -> None:
        options = list(options)
        if len(options) < MINIMUM_OPTIONS:
            raise ValueError(f"menu must contain at least {MINIMUM_OPTIONS} options")
        self.options = options
        self.selected = 0

    @property
    def current(self) -> str:
        return self.options[self.selected]

    def render(self, console: Console) -> None:
        for i, option in enumerate(self.options):
            line = Text()
            if i == self.selected:
                line.append(INDICATOR, style=ORANGE)
            else:
                line.append(" " * len(INDICATOR))
            line.append(f" {option}")
            console.print(line)

    def handle_key(self, event: KeyEvent) -> UpdateSignal:
        if event.key == Key.ARROW_UP:
            if self.selected > 0:
                self.selected -= 1
            return UpdateSignal.keep_going()
        if event.key == Key.ARROW_DOWN:
            if self.selected < len(self.options) - 1:
                self.selected += 1
            return UpdateSignal.keep_going()
        if event.key == Key.ENTER:
            return UpdateSignal.finish(value=self.current)
        return UpdateSignal.keep_going()
