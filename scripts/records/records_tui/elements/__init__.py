"""Renderable screen elements and the keyboard-handling contract."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from rich.console import Console

from records_tui.keys import KeyEvent
from records_tui.models import UpdateSignal


@runtime_checkable
class Element(Protocol):
    def render(self, console: Console) -> None: ...


@runtime_checkable
class InteractiveElement(Element, Protocol):
    """An element that also consumes keys; a screen holds exactly one."""

    def handle_key(self, event: KeyEvent) -> UpdateSignal: ...


def is_interactive(element: object) -> bool:
    return isinstance(element, InteractiveElement)
