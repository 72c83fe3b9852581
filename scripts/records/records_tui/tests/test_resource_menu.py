from __future__ import annotations

import io
import unittest
from pathlib import Path
import sys

from rich.console import Console

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from records_tui.config import BUILTIN_RESOURCES, schema_from_definition  # noqa: E402
from records_tui.controller import Controller  # noqa: E402
from records_tui.errors import RemoteError  # noqa: E402
from records_tui.keys import Key, KeyEvent  # noqa: E402
from records_tui.pagination import Page, PagedResult  # noqa: E402
from records_tui.resource_menu import ResourceMenu  # noqa: E402

ENTER = KeyEvent(Key.ENTER)
DOWN = KeyEvent(Key.ARROW_DOWN)
BACKSPACE = KeyEvent(Key.BACKSPACE)
ANY_KEY = KeyEvent.of_char("x")


def press(char: str) -> KeyEvent:
    return KeyEvent.of_char(char)


def typed(text: str) -> list[KeyEvent]:
    return [KeyEvent.of_char(char) for char in text] + [ENTER]


class ScriptedKeys:
    def __init__(self, events):
        self.events = list(events)

    def read_key(self) -> KeyEvent:
        if not self.events:
            raise EOFError("script exhausted")
        return self.events.pop(0)


class FakeClient:
    def __init__(self, schema, rows):
        self.schema = schema
        self.rows = {row["accountid"]: schema.entity(row) for row in rows}
        self.list_calls: list[str] = []
        self.created = []
        self.updated = []
        self.deleted: list[str] = []
        self.fail_get: Exception | None = None

    def list(self, search_term: str = "") -> PagedResult:
        self.list_calls.append(search_term)
        records = [r for r in self.rows.values() if search_term.lower() in r.label.lower()]
        return PagedResult.first(Page(records, ""), lambda token: Page([], ""))

    def get(self, record_id: str):
        if self.fail_get is not None:
            raise self.fail_get
        return self.rows[record_id]

    def create(self, record):
        self.created.append(record.to_payload())
        created = record.with_values({"accountid": "new"})
        self.rows["new"] = created
        return created

    def update(self, record_id: str, record) -> None:
        self.updated.append((record_id, record.to_payload()))
        self.rows[record_id] = record

    def delete(self, record_id: str) -> None:
        self.deleted.append(record_id)
        del self.rows[record_id]


class ResourceMenuTests(unittest.TestCase):
    def setUp(self):
        self.schema = schema_from_definition("accounts", BUILTIN_RESOURCES["accounts"])
        self.client = FakeClient(
            self.schema,
            [
                {"accountid": "1", "name": "Acme", "address1_city": "Leeds"},
                {"accountid": "2", "name": "Globex", "address1_city": "York"},
            ],
        )
        self.buffer = io.StringIO()

    def run_menu(self, *events) -> ResourceMenu:
        console = Console(file=self.buffer, width=100, height=40, color_system=None)
        menu = ResourceMenu(Controller(console, ScriptedKeys(events)), self.client, self.schema)
        menu.run()
        return menu

    def test_back_returns(self):
        self.run_menu(press("b"))
        self.assertEqual(self.client.list_calls, [""])
        self.assertIn("ACCOUNTS", self.buffer.getvalue())

    def test_create(self):
        self.run_menu(press("c"), *typed("Initech"), *typed("Austin"), ANY_KEY, press("b"))
        self.assertEqual(self.client.created, [{"name": "Initech", "address1_city": "Austin"}])
        self.assertIn("Account: Initech", self.buffer.getvalue())
        self.assertEqual(len(self.client.list_calls), 2)

    def test_create_requires_fields(self):
        events = [press("c"), ENTER, *typed("Initech"), *typed("Austin"), ANY_KEY, press("b")]
        self.run_menu(*events)
        self.assertIn("Name is required", self.buffer.getvalue())
        self.assertEqual(len(self.client.created), 1)

    def test_update_prefills_current_values(self):
        self.run_menu(press("u"), BACKSPACE, *typed("X"), ENTER, ANY_KEY, press("b"))
        record_id, payload = self.client.updated[0]
        self.assertEqual(record_id, "1")
        self.assertEqual(payload, {"accountid": "1", "name": "AcmX", "address1_city": "Leeds"})
        self.assertIn("Account updated", self.buffer.getvalue())

    def test_delete_confirmed(self):
        self.run_menu(DOWN, press("d"), ENTER, ANY_KEY, press("b"))
        self.assertEqual(self.client.deleted, ["2"])
        output = self.buffer.getvalue()
        self.assertIn("Are you sure you want to delete Globex", output)
        self.assertIn("Account deleted", output)

    def test_delete_declined(self):
        self.run_menu(press("d"), DOWN, ENTER, press("b"))
        self.assertEqual(self.client.deleted, [])

    def test_search_without_matches_clears_term(self):
        menu = self.run_menu(press("s"), *typed("zzz"), ANY_KEY, press("b"))
        self.assertEqual(self.client.list_calls, ["", "zzz", ""])
        self.assertEqual(menu.search_term, "")
        self.assertIn("No rows found", self.buffer.getvalue())

    def test_search_filters_list(self):
        menu = self.run_menu(press("s"), *typed("glob"), press("b"))
        self.assertEqual(self.client.list_calls, ["", "glob"])
        self.assertEqual(menu.search_term, "glob")
        self.assertIn("Search: glob", self.buffer.getvalue())

    def test_empty_resource_returns_to_caller(self):
        self.client.rows.clear()
        self.run_menu(ANY_KEY)
        self.assertEqual(self.client.list_calls, [""])
        self.assertIn("INFO", self.buffer.getvalue())

    def test_client_error_shows_error_screen(self):
        self.client.fail_get = RemoteError("Record not found. It may have been deleted", status_code=404)
        self.run_menu(press("u"), ANY_KEY)
        output = self.buffer.getvalue()
        self.assertIn("ERROR", output)
        self.assertIn("Record not found.\nIt may have been deleted", output)


if __name__ == "__main__":
    unittest.main()
