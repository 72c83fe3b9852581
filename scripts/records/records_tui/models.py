"""Shared model contracts for records, columns and element signals."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Generic, Mapping, Protocol, TypeVar, runtime_checkable

from records_tui.errors import SerializationError


@runtime_checkable
class Record(Protocol):
    """Anything the list and the client can handle: a stable id and a label."""

    @property
    def id(self) -> str: ...

    @property
    def label(self) -> str: ...


T = TypeVar("T", bound=Record)


@dataclass(frozen=True)
class ColumnSpec(Generic[T]):
    label: str
    projection: Callable[[T], str]

    def __post_init__(self) -> None:
        if self.projection is None:
            raise ValueError("column projection cannot be None")

    def cell(self, record: T) -> str:
        return str(self.projection(record))


@dataclass(frozen=True)
class ListAction:
    key: str
    label: str
    value: str


@dataclass(frozen=True)
class PropertyPrompt:
    field: str
    name: str
    text: str
    required: bool = False


@dataclass(frozen=True)
class ResourceSchema:
    name: str
    entity_label: str
    path: str
    id_field: str
    label_fields: tuple[str, ...]
    select_fields: tuple[str, ...] = ()
    search_fields: tuple[str, ...] = ()
    columns: tuple[ColumnSpec, ...] = ()
    prompts: tuple[PropertyPrompt, ...] = ()

    @property
    def required_fields(self) -> frozenset[str]:
        return frozenset(p.field for p in self.prompts if p.required)

    def entity(self, values: Mapping[str, Any] | None = None) -> "Entity":
        return Entity(schema=self, values=dict(values or {}))

    def decode(self, payload: Any) -> "Entity":
        if not isinstance(payload, dict):
            raise SerializationError(f"expected a JSON object for {self.entity_label}, got {type(payload).__name__}")
        return self.entity(payload)


@dataclass(frozen=True)
class Entity:
    """Configuration-driven record backed by the wire field mapping."""

    schema: ResourceSchema
    values: dict[str, Any] = field(default_factory=dict)

    @property
    def id(self) -> str:
        return self.get(self.schema.id_field)

    @property
    def label(self) -> str:
        parts = [self.get(name) for name in self.schema.label_fields]
        return " ".join(part for part in parts if part)

    def get(self, name: str) -> str:
        value = self.values.get(name)
        return "" if value is None else str(value)

    def with_values(self, updates: Mapping[str, Any]) -> "Entity":
        merged = dict(self.values)
        merged.update(updates)
        return Entity(schema=self.schema, values=merged)

    def to_payload(self) -> dict[str, Any]:
        """Write representation: annotations dropped, empty optional fields omitted."""
        required = self.schema.required_fields
        payload: dict[str, Any] = {}
        for name, value in self.values.items():
            if name.startswith("@"):
                continue
            empty = value is None or value == ""
            if name == self.schema.id_field:
                if not empty:
                    payload[name] = value
                continue
            if empty and name not in required:
                continue
            payload[name] = "" if value is None else value
        return payload

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "label": self.label, "values": dict(self.values)}


@dataclass(frozen=True)
class UpdateSignal:
    """Outcome of one keypress, passed from element to screen to controller."""

    continue_loop: bool = False
    needs_full_refresh: bool = False
    value: str = ""
    target_id: str = ""

    @classmethod
    def keep_going(cls) -> "UpdateSignal":
        return cls(continue_loop=True)

    @classmethod
    def finish(cls, value: str = "", target_id: str = "") -> "UpdateSignal":
        return cls(continue_loop=False, value=value, target_id=target_id)

    def with_full_refresh(self) -> "UpdateSignal":
        return replace(self, needs_full_refresh=True)
