"""Fluent builder for collection and record requests."""

from __future__ import annotations

from urllib.parse import quote

from records_tui.client import Request

# OData system query option names keep their "$" and select lists their ",".
QUERY_SAFE_CHARS = "$,"


class RequestBuilder:
    def __init__(self, method: str, url: str, body: bytes | None = None) -> None:
        self.method = method
        self.url = url
        self.body = body
        self._query: list[tuple[str, str]] = []
        self._headers: dict[str, str] = {}

    def add_query_param(self, key: str, value: str, encoded: bool = False) -> "RequestBuilder":
        """Append ``key=value``; pass ``encoded=True`` when value is already URL-escaped."""
        if not encoded:
            value = quote(value, safe=QUERY_SAFE_CHARS)
        self._query.append((quote(key, safe=QUERY_SAFE_CHARS), value))
        return self

    def add_header(self, key: str, value: str) -> "RequestBuilder":
        self._headers[key] = value
        return self

    def build_url(self) -> str:
        if not self._query:
            return self.url
        query = "&".join(f"{key}={value}" for key, value in self._query)
        separator = "&" if "?" in self.url else "?"
        return f"{self.url}{separator}{query}"

    def build(self) -> Request:
        return Request(
            method=self.method,
            url=self.build_url(),
            headers=dict(self._headers),
            body=self.body,
        )
