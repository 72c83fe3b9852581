"""Terminal records client entrypoint."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime, timezone

from rich.console import Console

from records_tui.client import Executor
from records_tui.client.resource import ResourceClient
from records_tui.client.transport import HttpxExecutor
from records_tui.config import AppConfig, resolve_config
from records_tui.controller import Controller
from records_tui.errors import RecordsTuiError
from records_tui.formatting import entity_title
from records_tui.keyboard import KeyboardReader
from records_tui.logs import configure_logging
from records_tui.models import ResourceSchema
from records_tui.resource_menu import ResourceMenu
from records_tui.screens import EXIT_OPTION, error_screen, main_menu_screen

logger = logging.getLogger(__name__)


def _menu_options(config: AppConfig) -> dict[str, ResourceSchema]:
    return {entity_title(schema.entity_label): schema for schema in config.resources.values()}


def _json_output(config: AppConfig, executor: Executor, resource: str, search: str) -> str:
    schema = config.resource(resource)
    client = ResourceClient.for_schema(executor, config.api_url, schema, config.page_limit)
    page = client.list(search)
    payload = {
        "resource": schema.name,
        "search": search,
        "collected_at": datetime.now(timezone.utc).isoformat(),
        "next_link": page.next_token,
        "records": [record.to_dict() for record in page],
    }
    return json.dumps(payload, indent=2)


def run_main_menu(controller: Controller, executor: Executor, config: AppConfig) -> None:
    options = _menu_options(config)
    while True:
        choice = controller.navigate_to(main_menu_screen(list(options))).value
        if choice == EXIT_OPTION:
            return
        schema = options[choice]
        client = ResourceClient.for_schema(executor, config.api_url, schema, config.page_limit)
        logger.info("opening %s", schema.name)
        ResourceMenu(controller, client, schema).run()


def _show_error(controller: Controller, message: str) -> None:
    try:
        controller.navigate_to(error_screen(message))
    except (EOFError, KeyboardInterrupt):
        logger.warning("error screen closed before acknowledgement")


def run_session(controller: Controller, executor: Executor, config: AppConfig) -> int:
    """Drive the main menu; returns the process exit code."""
    try:
        run_main_menu(controller, executor, config)
        return 0
    except KeyboardInterrupt:
        return 0
    except EOFError:
        logger.warning("keyboard input closed")
        return 1
    except (RecordsTuiError, ValueError) as exc:
        logger.exception("session failed")
        _show_error(controller, str(exc))
        return 1
    finally:
        controller.exit()


def _run_interactive(config: AppConfig, executor: Executor, console: Console) -> int:
    with KeyboardReader() as keyboard:
        return run_session(Controller(console, keyboard), executor, config)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Terminal client for OData-style record collections")
    parser.add_argument("--json", action="store_true", help="Print the first page of a resource as JSON")
    parser.add_argument("--config", help="Optional JSON config file for settings and resource overrides")
    parser.add_argument("--api-url", help="Base URL of the records API")
    parser.add_argument("--page-limit", type=int, help="Records per page override")
    parser.add_argument("--log-file", help="Write logs to this file")
    parser.add_argument("--resource", default="accounts", help="Resource to print in --json mode")
    parser.add_argument("--search", default="", help="Search term for --json mode")
    args = parser.parse_args(argv)

    err_console = Console(stderr=True, highlight=False)
    try:
        config = resolve_config(
            args.config,
            overrides={"api_url": args.api_url, "page_limit": args.page_limit, "log_file": args.log_file},
        )
    except ValueError as exc:
        err_console.print(f"[red]error:[/red] {exc}")
        return 1

    configure_logging(config.log_file, config.log_level)

    with HttpxExecutor(token=config.token, timeout=config.timeout_seconds) as executor:
        if args.json:
            try:
                print(_json_output(config, executor, args.resource, args.search))
            except (RecordsTuiError, ValueError) as exc:
                logger.error("json output failed: %s", exc)
                err_console.print(f"[red]error:[/red] {exc}")
                return 1
            return 0

        if not sys.stdin.isatty():
            err_console.print("[red]error:[/red] interactive mode needs a terminal; use --json for scripting")
            return 1
        return _run_interactive(config, executor, Console(highlight=False))


if __name__ == "__main__":
    raise SystemExit(main())
