"""Paged, keyboard-driven record table."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Generic, Sequence, TypeVar

from rich.console import Console
from rich.text import Text

from records_tui.errors import NoDataError
from records_tui.formatting import format_cell
from records_tui.keys import Key, KeyEvent
from records_tui.layout import COLUMN_DIVIDER, compute_column_widths, table_width
from records_tui.models import ColumnSpec, ListAction, Record, UpdateSignal
from records_tui.pagination import PagedResult
from records_tui.palette import GREY, ORANGE, SELECTED_ROW

T = TypeVar("T", bound=Record)

ROW_DIVIDER = "-"
COMMANDS_HEADER = "\n\nCommands\n"
NEXT_PAGE_KEY = "→"
PREVIOUS_PAGE_KEY = "←"
NEXT_PAGE_LABEL = "Next page"
PREVIOUS_PAGE_LABEL = "Previous page"


@dataclass
class ScreenState(Generic[T]):
    page: PagedResult[T]
    selected: int = 0
    widths: list[int] = field(default_factory=list)
    header_cells: list[str] = field(default_factory=list)
    row_cells: list[list[str]] = field(default_factory=list)


class ListTable(Generic[T]):
    """Table over the current page of a PagedResult.

    The page must be non-empty: callers filter empty results before
    building the element. Widths are recomputed whenever the page changes,
    never on cursor movement.
    """

    def __init__(
        self,
        page: PagedResult[T],
        columns: Sequence[ColumnSpec[T]],
        actions: Sequence[ListAction] = (),
        terminal_width: Callable[[], int | None] | None = None,
    ) -> None:
        if not columns:
            raise ValueError("list requires at least one column")
        self.columns = list(columns)
        self.actions = list(actions)
        self._terminal_width = terminal_width or (lambda: None)
        self._state: ScreenState[T] = ScreenState(page=page)
        self._load_page(page)

    @property
    def page(self) -> PagedResult[T]:
        return self._state.page

    @property
    def selected(self) -> int:
        return self._state.selected

    @property
    def column_widths(self) -> list[int]:
        return list(self._state.widths)

    @property
    def current_record(self) -> T:
        self._require_data()
        return self._state.page.records[self._state.selected]

    def render(self, console: Console) -> None:
        state = self._state
        console.print(self._row(state.header_cells, ORANGE))
        console.print(ROW_DIVIDER * table_width(state.widths), markup=False)
        for i, cells in enumerate(state.row_cells):
            console.print(self._row(cells, SELECTED_ROW if i == state.selected else ""))
        console.print(self._controls(), end="")

    def handle_key(self, event: KeyEvent) -> UpdateSignal:
        if event.key == Key.ARROW_UP:
            self._require_data()
            if self._state.selected > 0:
                self._state.selected -= 1
            return UpdateSignal.keep_going()
        if event.key == Key.ARROW_DOWN:
            self._require_data()
            if self._state.selected < len(self._state.page) - 1:
                self._state.selected += 1
            return UpdateSignal.keep_going()
        if event.key == Key.ARROW_RIGHT:
            if not self._state.page.has_next():
                return UpdateSignal.keep_going()
            self._load_page(self._state.page.next())
            return UpdateSignal.keep_going().with_full_refresh()
        if event.key == Key.ARROW_LEFT:
            previous = self._state.page.previous_page()
            if previous is None:
                return UpdateSignal.keep_going()
            self._load_page(previous)
            return UpdateSignal.keep_going().with_full_refresh()
        return self._handle_action(event)

    def _handle_action(self, event: KeyEvent) -> UpdateSignal:
        self._require_data()
        for action in self.actions:
            if event.char and event.char == action.key:
                return UpdateSignal.finish(value=action.value, target_id=self.current_record.id)
        return UpdateSignal.keep_going()

    def _load_page(self, page: PagedResult[T]) -> None:
        headers = [column.label for column in self.columns]
        raw_rows = [[column.cell(record) for column in self.columns] for record in page.records]
        widths = compute_column_widths(headers, raw_rows, self._terminal_width())
        self._state = ScreenState(
            page=page,
            selected=0,
            widths=widths,
            header_cells=[format_cell(h, w) for h, w in zip(headers, widths)],
            row_cells=[[format_cell(c, w) for c, w in zip(row, widths)] for row in raw_rows],
        )
        self._require_data()

    def _require_data(self) -> None:
        if len(self._state.page) == 0:
            raise NoDataError()

    def _row(self, cells: list[str], style: str) -> Text:
        return Text(COLUMN_DIVIDER.join(cells), style=style)

    def _controls(self) -> Text:
        text = Text(COMMANDS_HEADER + "\n")
        page = self._state.page
        self._append_control(text, NEXT_PAGE_KEY, NEXT_PAGE_LABEL, page.has_next())
        self._append_control(text, PREVIOUS_PAGE_KEY, PREVIOUS_PAGE_LABEL, page.has_previous())
        for action in self.actions:
            self._append_control(text, action.key, action.label, True)
        return text

    @staticmethod
    def _append_control(text: Text, key: str, label: str, enabled: bool) -> None:
        text.append(key, style=ORANGE if enabled else GREY)
        text.append(f" : {label}\n", style="" if enabled else GREY)
