"""Prebuilt screens used by the application workflows."""

from __future__ import annotations

from typing import Callable, Sequence

from records_tui.elements.acknowledge import Acknowledge
from records_tui.elements.list_table import ListTable
from records_tui.elements.menu import Menu
from records_tui.elements.text import Text, Title
from records_tui.elements.text_input import TextInput
from records_tui.formatting import entity_title, readable_message
from records_tui.models import Entity, ListAction, PropertyPrompt, ResourceSchema
from records_tui.pagination import PagedResult
from records_tui.palette import BLUE, GREEN, RED
from records_tui.screen import Screen

EXIT_OPTION = "Exit"
YES_OPTION = "Yes"
NO_OPTION = "No"

SEARCH = "Search"
CREATE = "Create"
UPDATE = "Update"
DELETE = "Delete"
BACK = "Back"

LIST_ACTIONS = (
    ListAction(key="s", label="Set/Clear search term", value=SEARCH),
    ListAction(key="c", label="Create", value=CREATE),
    ListAction(key="u", label="Update", value=UPDATE),
    ListAction(key="d", label="Delete", value=DELETE),
    ListAction(key="b", label="Back to main menu", value=BACK),
)


def main_menu_screen(options: Sequence[str]) -> Screen:
    return Screen([Title("Main menu"), Menu([*options, EXIT_OPTION])])


def list_screen(
    schema: ResourceSchema,
    page: PagedResult[Entity],
    search_term: str = "",
    actions: Sequence[ListAction] = LIST_ACTIONS,
    terminal_width: Callable[[], int | None] | None = None,
) -> Screen:
    elements = [Title(entity_title(schema.entity_label))]
    if search_term:
        elements.append(Text(f"Search: {search_term}"))
    elements.append(ListTable(page, schema.columns, actions, terminal_width))
    return Screen(elements)


def input_screen(title: str, prompt: PropertyPrompt, value: str = "") -> Screen:
    return Screen([Title(title), Text(prompt.text), TextInput(prompt.name, value, prompt.required)])


def confirmation_screen(message: str) -> Screen:
    return Screen([Title("Confirmation required"), Text(message), Menu([YES_OPTION, NO_OPTION])])


def info_screen(message: str) -> Screen:
    return Screen([Title("Info", BLUE), Text(message), Acknowledge()])


def success_screen(message: str) -> Screen:
    return Screen([Title("Success", GREEN), Text(message), Acknowledge()])


def error_screen(message: str) -> Screen:
    return Screen([Title("Error", RED), Text(readable_message(message)), Acknowledge()])
