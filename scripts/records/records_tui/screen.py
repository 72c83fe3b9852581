"""Screen composition and the full/partial refresh policy."""

from __future__ import annotations

from typing import Sequence

from rich.console import Console

from records_tui.elements import Element, InteractiveElement, is_interactive
from records_tui.errors import MultipleInteractiveElementsError, NoInteractiveElementError
from records_tui.keys import KeyEvent
from records_tui.models import UpdateSignal
from records_tui.palette import CLEAR_ALL, CURSOR_HOME, HIDE_CURSOR, SHOW_CURSOR

# Below this many rows a partial redraw can leave stale lines behind.
MINIMUM_HEIGHT_FOR_PARTIAL_REFRESH = 22


class Screen:
    """Ordered elements with exactly one interactive element receiving keys."""

    def __init__(self, elements: Sequence[Element]) -> None:
        self.elements: list[Element] = list(elements)
        interactive = [element for element in self.elements if is_interactive(element)]
        if not interactive:
            raise NoInteractiveElementError()
        if len(interactive) > 1:
            raise MultipleInteractiveElementsError()
        self.interactive: InteractiveElement = interactive[0]  # type: ignore[assignment]
        self.needs_full_refresh = False

    def mount(self, console: Console) -> None:
        console.control(HIDE_CURSOR, *CLEAR_ALL)
        self.render(console)

    def dismount(self, console: Console) -> None:
        console.control(SHOW_CURSOR, *CLEAR_ALL)

    def refresh(self, console: Console) -> None:
        if self.should_do_full_refresh(console.size.height):
            console.control(*CLEAR_ALL)
        else:
            console.control(CURSOR_HOME)
        self.render(console)

    def render(self, console: Console) -> None:
        for element in self.elements:
            element.render(console)

    def handle_key(self, event: KeyEvent) -> UpdateSignal:
        signal = self.interactive.handle_key(event)
        if signal.needs_full_refresh:
            self.needs_full_refresh = True
        return signal

    def should_do_full_refresh(self, height: int | None) -> bool:
        """Answer for this refresh and re-arm the flag from the current height.

        A pending element request or a short terminal forces a full repaint;
        the height check also carries over to the next call, so one refresh
        after the terminal grows back is still a full one.
        """
        if height is None:
            height = MINIMUM_HEIGHT_FOR_PARTIAL_REFRESH - 1
        current = self.needs_full_refresh
        self.needs_full_refresh = height < MINIMUM_HEIGHT_FOR_PARTIAL_REFRESH
        return current or self.needs_full_refresh
