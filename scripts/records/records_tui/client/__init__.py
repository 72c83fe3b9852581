"""Request/response contracts and wire envelope helpers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable

from records_tui.errors import SerializationError


@dataclass(frozen=True)
class Request:
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None


@dataclass(frozen=True)
class Response:
    status_code: int
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400


# Anything that turns a Request into a Response, raising TransportError when
# no response could be obtained.
Executor = Callable[[Request], Response]


def decode_json(body: bytes) -> Any:
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SerializationError(f"invalid JSON in response: {exc}") from exc


def encode_json(payload: Any) -> bytes:
    try:
        return json.dumps(payload).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"failed to serialise record: {exc}") from exc


def parse_error(body: bytes) -> tuple[str, str]:
    """Return ``(message, code)`` from an error envelope, else the raw body text."""
    raw = body.decode("utf-8", errors="replace")
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return raw, ""
    error = payload.get("error") if isinstance(payload, dict) else None
    if not isinstance(error, dict):
        return raw, ""
    message = str(error.get("message") or "")
    code = str(error.get("code") or "")
    return (message or raw), code
