from __future__ import annotations

import contextlib
import io
import json
import unittest
from pathlib import Path
from unittest import mock
import sys

from rich.console import Console

sys.path.insert(0, str(Path(__file__).resolve().parents[2]))

from records_tui import app  # noqa: E402
from records_tui.client import Request, Response  # noqa: E402
from records_tui.config import resolve_config  # noqa: E402
from records_tui.controller import Controller  # noqa: E402
from records_tui.errors import TransportError  # noqa: E402
from records_tui.keys import Key, KeyEvent  # noqa: E402

API_URL = "https://org.example.com/api/data/v9.2"


class StubExecutor:
    def __init__(self, response: Response):
        self.response = response
        self.requests: list[Request] = []

    def __call__(self, request: Request) -> Response:
        self.requests.append(request)
        return self.response


class JsonModeTests(unittest.TestCase):
    def run_main(self, argv, response: Response) -> tuple[int, str, StubExecutor]:
        executor = StubExecutor(response)
        stdout = io.StringIO()
        with mock.patch.object(app, "HttpxExecutor") as executor_cls, mock.patch.dict(
            "os.environ", {}, clear=True
        ), contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(io.StringIO()):
            executor_cls.return_value.__enter__.return_value = executor
            code = app.main(argv)
        return code, stdout.getvalue(), executor

    def test_prints_first_page(self):
        body = json.dumps(
            {"value": [{"contactid": "c1", "firstname": "Ada", "lastname": "Lovelace"}]}
        ).encode("utf-8")
        code, output, executor = self.run_main(
            ["--json", "--api-url", API_URL, "--resource", "contacts", "--search", "ada", "--page-limit", "2"],
            Response(200, body),
        )
        self.assertEqual(code, 0)
        payload = json.loads(output)
        self.assertEqual(payload["resource"], "contacts")
        self.assertEqual(payload["records"][0]["label"], "Ada Lovelace")
        self.assertEqual(payload["next_link"], "")
        self.assertIn("$filter=", executor.requests[0].url)
        self.assertEqual(executor.requests[0].headers["Prefer"], "odata.maxpagesize=2")

    def test_remote_error_exits_nonzero(self):
        code, output, _ = self.run_main(
            ["--json", "--api-url", API_URL],
            Response(401, b'{"error":{"code":"0x80072560","message":"Unauthorized"}}'),
        )
        self.assertEqual(code, 1)
        self.assertEqual(output, "")

    def test_unknown_resource_exits_nonzero(self):
        code, _, _ = self.run_main(["--json", "--api-url", API_URL, "--resource", "leads"], Response(200, b"{}"))
        self.assertEqual(code, 1)

    def test_missing_api_url(self):
        with mock.patch.dict("os.environ", {}, clear=True), contextlib.redirect_stderr(io.StringIO()):
            self.assertEqual(app.main(["--json"]), 1)


class ScriptedKeys:
    """Yields key events; exception instances in the script are raised instead."""

    def __init__(self, events):
        self.events = list(events)

    def read_key(self) -> KeyEvent:
        if not self.events:
            raise EOFError("script exhausted")
        event = self.events.pop(0)
        if isinstance(event, BaseException):
            raise event
        return event


class SessionTests(unittest.TestCase):
    def setUp(self):
        self.config = resolve_config(overrides={"api_url": API_URL}, environ={})
        self.buffer = io.StringIO()

    def session(self, *events) -> int:
        console = Console(file=self.buffer, width=80, height=30, color_system=None)
        controller = Controller(console, ScriptedKeys(events))
        code = app.run_session(controller, StubExecutor(Response(200, b"{}")), self.config)
        self.assertIsNone(controller.current_screen)
        return code

    def test_exit_from_main_menu(self):
        down = KeyEvent(Key.ARROW_DOWN)
        self.assertEqual(self.session(down, down, KeyEvent(Key.ENTER)), 0)
        output = self.buffer.getvalue()
        self.assertIn("Accounts", output)
        self.assertIn("Contacts", output)

    def test_interrupt_at_main_menu(self):
        self.assertEqual(self.session(KeyboardInterrupt()), 0)

    def test_error_screen_acknowledged(self):
        with mock.patch.object(app, "run_main_menu", side_effect=TransportError("server unreachable")), \
                self.assertLogs("records_tui.app", level="WARNING"):
            self.assertEqual(self.session(KeyEvent.of_char("x")), 1)
        self.assertIn("server unreachable", self.buffer.getvalue())

    def test_error_screen_input_closed(self):
        with mock.patch.object(app, "run_main_menu", side_effect=TransportError("server unreachable")), \
                self.assertLogs("records_tui.app", level="WARNING") as logs:
            self.assertEqual(self.session(), 1)
        self.assertTrue(any("closed before acknowledgement" in line for line in logs.output))

    def test_error_screen_interrupted(self):
        with mock.patch.object(app, "run_main_menu", side_effect=ValueError("unknown resource: leads")), \
                self.assertLogs("records_tui.app", level="WARNING"):
            self.assertEqual(self.session(KeyboardInterrupt()), 1)


if __name__ == "__main__":
    unittest.main()
