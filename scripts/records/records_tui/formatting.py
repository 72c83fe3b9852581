"""Shared text helpers for cells and human-facing messages."""

from __future__ import annotations

from records_tui.layout import CELL_PADDING

TRUNCATION_MARKER = "…"


def truncate(text: str, max_length: int) -> str:
    if max_length <= 0:
        return ""
    if len(text) <= max_length:
        return text
    return text[: max_length - len(TRUNCATION_MARKER)] + TRUNCATION_MARKER


def format_cell(text: str, width: int, padding: int = CELL_PADDING) -> str:
    """Truncate to the content area, left pad, then fit exactly ``width`` chars."""
    content = truncate(text, width - padding)
    padded = " " * (padding // 2) + content
    return padded.ljust(width)[:width]


def readable_message(message: str) -> str:
    # One sentence per line reads better on the error screen.
    return message.replace(". ", ".\n")


def entity_title(label: str) -> str:
    return label if label.endswith("s") else f"{label}s"
