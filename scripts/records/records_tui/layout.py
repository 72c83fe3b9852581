"""Column width selection for tabular output by terminal width."""

from __future__ import annotations

from typing import Sequence

CELL_PADDING = 2
# Columns grow to at most 6/5 (1.2x) of their natural width.
MAX_WIDTH_NUMERATOR = 6
MAX_WIDTH_DENOMINATOR = 5
DEFAULT_TERMINAL_WIDTH = 80
COLUMN_DIVIDER = "|"


def natural_widths(headers: Sequence[str], rows: Sequence[Sequence[str]], padding: int = CELL_PADDING) -> list[int]:
    widths = [len(header) + padding for header in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell) + padding)
    return widths


def compute_column_widths(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    terminal_width: int | None,
    padding: int = CELL_PADDING,
) -> list[int]:
    """Scale natural widths to the terminal, never past 1.2x natural.

    ``floor(natural * min(6/5, available/total))`` kept in integers so the
    result is exact.
    """
    if not headers:
        return []
    width = terminal_width or DEFAULT_TERMINAL_WIDTH
    natural = natural_widths(headers, rows, padding)
    total = sum(natural)
    if total == 0:
        return [0] * len(natural)
    available = width - (len(headers) - 1)
    return [max(0, min(w * MAX_WIDTH_NUMERATOR // MAX_WIDTH_DENOMINATOR, w * available // total)) for w in natural]


def table_width(widths: Sequence[int]) -> int:
    if not widths:
        return 0
    return sum(widths) + len(COLUMN_DIVIDER) * (len(widths) - 1)
