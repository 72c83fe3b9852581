"""List/search/create/update/delete workflow for one configured resource."""

from __future__ import annotations

import logging

from records_tui import screens
from records_tui.client.resource import ResourceClient
from records_tui.controller import Controller
from records_tui.errors import RecordsTuiError
from records_tui.formatting import entity_title
from records_tui.models import Entity, PropertyPrompt, ResourceSchema

logger = logging.getLogger(__name__)

SEARCH_PROMPT = PropertyPrompt(field="", name="Search term", text="Enter a search term (leave blank to clear)")
NO_ROWS_MESSAGE = "No rows found"


class ResourceMenu:
    def __init__(self, controller: Controller, client: ResourceClient[Entity], schema: ResourceSchema) -> None:
        self.controller = controller
        self.client = client
        self.schema = schema
        self.search_term = ""

    def run(self) -> None:
        """Loop on the list screen until Back; any client error ends the loop on the error screen."""
        try:
            self._loop()
        except RecordsTuiError as exc:
            logger.error("%s menu failed: %s", self.schema.name, exc)
            self.controller.navigate_to(screens.error_screen(str(exc)))

    def _loop(self) -> None:
        while True:
            page = self.client.list(self.search_term)
            if len(page) == 0:
                self.controller.navigate_to(screens.info_screen(NO_ROWS_MESSAGE))
                if self.search_term:
                    self.search_term = ""
                    continue
                return

            signal = self.controller.navigate_to(
                screens.list_screen(
                    self.schema,
                    page,
                    self.search_term,
                    terminal_width=lambda: self.controller.console.size.width,
                )
            )
            logger.info("%s action %s target=%s", self.schema.name, signal.value or "-", signal.target_id or "-")

            if signal.value == screens.SEARCH:
                self.search_term = self.prompt_search()
            elif signal.value == screens.CREATE:
                self.create()
            elif signal.value == screens.UPDATE:
                self.update(signal.target_id)
            elif signal.value == screens.DELETE:
                self.delete(signal.target_id)
            elif signal.value == screens.BACK:
                return

    def prompt_search(self) -> str:
        title = f"Search {entity_title(self.schema.entity_label)}"
        signal = self.controller.navigate_to(screens.input_screen(title, SEARCH_PROMPT, self.search_term))
        return signal.value.strip()

    def prompt_values(self, title: str, current: Entity | None = None) -> dict[str, str]:
        values = {}
        for prompt in self.schema.prompts:
            value = current.get(prompt.field) if current is not None else ""
            signal = self.controller.navigate_to(screens.input_screen(title, prompt, value))
            values[prompt.field] = signal.value
        return values

    def create(self) -> Entity:
        label = self.schema.entity_label
        draft = self.schema.entity(self.prompt_values(f"Create {label}"))
        created = self.client.create(draft)
        logger.info("created %s %s", self.schema.name, created.id)
        self.controller.navigate_to(screens.success_screen(f"{label}: {created.label}"))
        return created

    def update(self, record_id: str) -> None:
        label = self.schema.entity_label
        current = self.client.get(record_id)
        changes = self.prompt_values(f"Update {label}", current)
        self.client.update(record_id, current.with_values(changes))
        logger.info("updated %s %s", self.schema.name, record_id)
        self.controller.navigate_to(screens.success_screen(f"{label} updated"))

    def delete(self, record_id: str) -> bool:
        label = self.schema.entity_label
        current = self.client.get(record_id)
        signal = self.controller.navigate_to(
            screens.confirmation_screen(f"Are you sure you want to delete {current.label}")
        )
        if signal.value != screens.YES_OPTION:
            return False
        self.client.delete(record_id)
        logger.info("deleted %s %s", self.schema.name, record_id)
        self.controller.navigate_to(screens.success_screen(f"{label} deleted"))
        return True
