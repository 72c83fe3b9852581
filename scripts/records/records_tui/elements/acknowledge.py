"""Press-any-key prompt."""

from __future__ import annotations

from rich.console import Console

from records_tui.keys import KeyEvent
from records_tui.models import UpdateSignal

PROMPT = "\n\nPress any key to continue"


class Acknowledge:
    def render(self, console: Console) -> None:
        console.print(PROMPT, end="", markup=False)

    def handle_key(self, event: KeyEvent) -> UpdateSignal:
        return UpdateSignal.finish()
