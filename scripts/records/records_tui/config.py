"""Settings and resource definitions: built-ins, JSON config file, environment."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Mapping

from records_tui.formatting import entity_title
from records_tui.models import ColumnSpec, Entity, PropertyPrompt, ResourceSchema

DEFAULT_PAGE_LIMIT = 5
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_LOG_LEVEL = "INFO"

ENV_API_URL = "RECORDS_API_URL"
ENV_PAGE_LIMIT = "RECORDS_PAGE_LIMIT"
ENV_TOKEN = "RECORDS_API_TOKEN"
ENV_LOG_FILE = "RECORDS_TUI_LOG"

BUILTIN_RESOURCES: dict[str, dict] = {
    "accounts": {
        "label": "Account",
        "path": "accounts",
        "id_field": "accountid",
        "label_fields": ["name"],
        "select": ["accountid", "name", "address1_city"],
        "search": ["name", "address1_city"],
        "columns": [
            {"label": "Name", "fields": ["name"]},
            {"label": "City", "fields": ["address1_city"]},
        ],
        "prompts": [
            {"field": "name", "name": "Name", "text": "Enter account name", "required": True},
            {"field": "address1_city", "name": "City", "text": "Enter account city", "required": True},
        ],
    },
    "contacts": {
        "label": "Contact",
        "path": "contacts",
        "id_field": "contactid",
        "label_fields": ["firstname", "lastname"],
        "select": ["contactid", "firstname", "lastname", "emailaddress1"],
        "search": ["firstname", "lastname", "emailaddress1"],
        "columns": [
            {"label": "Name", "fields": ["firstname", "lastname"]},
            {"label": "Email", "fields": ["emailaddress1"]},
        ],
        "prompts": [
            {"field": "firstname", "name": "First name", "text": "Enter contact's first name", "required": True},
            {"field": "lastname", "name": "Last name", "text": "Enter contact's last name"},
            {"field": "emailaddress1", "name": "Email", "text": "Enter contact's email address"},
        ],
    },
}


@dataclass
class AppConfig:
    api_url: str
    page_limit: int = DEFAULT_PAGE_LIMIT
    token: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_file: str | None = None
    log_level: str = DEFAULT_LOG_LEVEL
    resources: dict[str, ResourceSchema] = field(default_factory=dict)

    def resource(self, name: str) -> ResourceSchema:
        if name not in self.resources:
            raise ValueError(f"unknown resource: {name}")
        return self.resources[name]


def load_user_config(path: str | None) -> dict:
    if not path:
        return {}

    config_path = Path(path)
    if not config_path.exists():
        raise ValueError(f"config path not found: {config_path}")

    try:
        data = json.loads(config_path.read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"invalid JSON config: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError("config root must be a JSON object")
    return data


def _field_projection(fields: list[str]) -> Callable[[Entity], str]:
    def project(record: Entity) -> str:
        return " ".join(value for value in (record.get(name) for name in fields) if value)

    return project


def schema_from_definition(name: str, definition: Mapping[str, Any]) -> ResourceSchema:
    try:
        id_field = str(definition["id_field"])
    except KeyError as exc:
        raise ValueError(f"resource {name}: missing {exc.args[0]}") from exc

    label_fields = [str(f) for f in definition.get("label_fields") or []]
    select = [str(f) for f in definition.get("select") or []]
    if not label_fields:
        raise ValueError(f"resource {name}: label_fields must not be empty")

    columns = []
    for column in definition.get("columns") or [{"label": "Name", "fields": label_fields}]:
        if not isinstance(column, dict):
            raise ValueError(f"resource {name}: each column must be a JSON object")
        fields = [str(f) for f in column.get("fields") or []]
        columns.append(ColumnSpec(label=str(column.get("label", ",".join(fields))), projection=_field_projection(fields)))

    prompts = []
    for prompt in definition.get("prompts") or []:
        if not isinstance(prompt, dict) or "field" not in prompt:
            raise ValueError(f"resource {name}: each prompt needs a 'field'")
        prompts.append(
            PropertyPrompt(
                field=str(prompt["field"]),
                name=str(prompt.get("name", prompt["field"])),
                text=str(prompt.get("text", f"Enter {prompt['field']}")),
                required=bool(prompt.get("required", False)),
            )
        )

    return ResourceSchema(
        name=name,
        entity_label=str(definition.get("label", name.title())),
        path=str(definition.get("path", name)),
        id_field=id_field,
        label_fields=tuple(label_fields),
        select_fields=tuple(select),
        search_fields=tuple(str(f) for f in definition.get("search") or []),
        columns=tuple(columns),
        prompts=tuple(prompts),
    )


def _resolve_resources(user_resources: Any) -> dict[str, ResourceSchema]:
    definitions = {name: dict(definition) for name, definition in BUILTIN_RESOURCES.items()}
    if isinstance(user_resources, dict):
        for name, definition in user_resources.items():
            if definition is False:
                # disable map: {"contacts": false}
                if name not in definitions:
                    raise ValueError(f"unknown resource in config: {name}")
                del definitions[name]
            elif isinstance(definition, dict):
                merged = dict(definitions.get(name, {}))
                merged.update(definition)
                definitions[name] = merged
            else:
                raise ValueError(f"invalid definition for resource: {name}")
    elif user_resources is not None:
        raise ValueError("'resources' must be a JSON object")

    if not definitions:
        raise ValueError("no resources configured")
    schemas = {name: schema_from_definition(name, definition) for name, definition in definitions.items()}
    titles: dict[str, str] = {}
    for name, schema in schemas.items():
        title = entity_title(schema.entity_label)
        if title in titles:
            raise ValueError(f"resources {titles[title]} and {name} share the menu title {title!r}")
        titles[title] = name
    return schemas


def resolve_config(
    config_path: str | None = None,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """Merge built-ins, the JSON file, the environment and CLI overrides, in that order."""
    env = os.environ if environ is None else environ
    user_config = load_user_config(config_path)

    settings: dict[str, Any] = {
        "api_url": user_config.get("api_url", ""),
        "page_limit": user_config.get("page_limit", DEFAULT_PAGE_LIMIT),
        "token": user_config.get("token"),
        "timeout_seconds": user_config.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS),
        "log_file": user_config.get("log_file"),
        "log_level": user_config.get("log_level", DEFAULT_LOG_LEVEL),
    }

    if env.get(ENV_API_URL):
        settings["api_url"] = env[ENV_API_URL]
    if env.get(ENV_PAGE_LIMIT):
        settings["page_limit"] = env[ENV_PAGE_LIMIT]
    if env.get(ENV_TOKEN):
        settings["token"] = env[ENV_TOKEN]
    if env.get(ENV_LOG_FILE):
        settings["log_file"] = env[ENV_LOG_FILE]

    for key, value in (overrides or {}).items():
        if value is not None:
            settings[key] = value

    if not settings["api_url"]:
        raise ValueError(f"api_url is required (config file, {ENV_API_URL} or --api-url)")

    try:
        page_limit = max(1, int(settings["page_limit"]))
        timeout = float(settings["timeout_seconds"])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid numeric setting: {exc}") from exc

    return AppConfig(
        api_url=str(settings["api_url"]),
        page_limit=page_limit,
        token=settings["token"] or None,
        timeout_seconds=timeout,
        log_file=settings["log_file"] or None,
        log_level=str(settings["log_level"]).upper(),
        resources=_resolve_resources(user_config.get("resources")),
    )
