"""Static text and title elements."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text as RichText

from records_tui.palette import PURPLE


class Text:
    def __init__(self, content: str) -> None:
        self.content = content

    def render(self, console: Console) -> None:
        console.print(RichText(self.content), end="\n\n")


class Title:
    """Upper-cased, coloured heading."""

    def __init__(self, content: str, style: str = PURPLE) -> None:
        self.content = content.upper()
        self.style = style

    def render(self, console: Console) -> None:
        console.print(RichText(self.content, style=self.style), end="\n\n")
