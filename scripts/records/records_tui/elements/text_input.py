"""Single-line text input with required-field validation."""

from __future__ import annotations

from rich.console import Console
from rich.text import Text

from records_tui.errors import ValidationError
from records_tui.keys import Key, KeyEvent
from records_tui.models import UpdateSignal
from records_tui.palette import RED, SHOW_CURSOR


class TextInput:
    """Collects one value.

    Submitting a required field empty never leaves the element: the
    ValidationError is turned into an inline message and the loop continues.
    """

    def __init__(self, property_name: str, value: str = "", required: bool = False) -> None:
        self.property_name = property_name
        self.value = value
        self.required = required
        self.error_message = ""

    def render(self, console: Console) -> None:
        console.control(SHOW_CURSOR)
        line = Text(f"\n{self.property_name}")
        if self.required:
            line.append("(")
            line.append("*", style=RED)
            line.append(")")
        line.append(f": {self.value}")
        console.print(line, end="")
        if self.error_message:
            console.print(Text(f"\n\n{self.error_message}", style=RED), end="")

    def handle_key(self, event: KeyEvent) -> UpdateSignal:
        self.error_message = ""
        if event.key == Key.ENTER:
            try:
                return self._submit()
            except ValidationError as exc:
                self.error_message = str(exc)
                return UpdateSignal.keep_going()
        if event.key == Key.BACKSPACE:
            self.value = self.value[:-1]
            return UpdateSignal.keep_going().with_full_refresh()
        if event.is_printable:
            self.value += event.char
        return UpdateSignal.keep_going()

    def _submit(self) -> UpdateSignal:
        if self.required and self.value == "":
            raise ValidationError(f"{self.property_name} is required")
        return UpdateSignal.finish(value=self.value)
