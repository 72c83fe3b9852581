"""Generic CRUD and search client for one REST collection."""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, Sequence, TypeVar
from urllib.parse import quote_plus

from records_tui.client import Executor, Request, Response, decode_json, encode_json, parse_error
from records_tui.client.request import RequestBuilder
from records_tui.errors import RemoteError, SerializationError
from records_tui.models import Entity, Record, ResourceSchema
from records_tui.pagination import Page, PagedResult

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=Record)

SELECT_PARAM = "$select"
FILTER_PARAM = "$filter"
NEXT_LINK_FIELD = "@odata.nextLink"
VALUES_FIELD = "value"
DEFAULT_PAGE_LIMIT = 5


def build_filter(search_term: str, fields: Sequence[str]) -> str:
    """OR a ``contains`` predicate across every field, URL-escaped once."""
    if not search_term or not fields:
        return ""
    literal = search_term.replace("'", "''")
    predicates = [f"contains({name},'{literal}')" for name in fields]
    return quote_plus(" or ".join(predicates))


class ResourceClient(Generic[T]):
    """Synchronous client for ``<base_url>/<resource_path>``.

    ``decode`` turns one JSON object into a record and ``encode`` turns a
    record into its write payload, so the same client serves any record type.
    Every failure raises; nothing is retried.
    """

    def __init__(
        self,
        executor: Executor,
        base_url: str,
        resource_path: str,
        decode: Callable[[Any], T],
        encode: Callable[[T], dict],
        select_fields: Sequence[str] = (),
        search_fields: Sequence[str] = (),
        page_limit: int = DEFAULT_PAGE_LIMIT,
        next_link_field: str = NEXT_LINK_FIELD,
        values_field: str = VALUES_FIELD,
    ) -> None:
        self.executor = executor
        self.resource_url = f"{base_url.rstrip('/')}/{resource_path.strip('/')}"
        self.decode = decode
        self.encode = encode
        self.select_fields = tuple(select_fields)
        self.search_fields = tuple(search_fields)
        self.page_limit = max(1, int(page_limit))
        self.next_link_field = next_link_field
        self.values_field = values_field

    @classmethod
    def for_schema(
        cls,
        executor: Executor,
        base_url: str,
        schema: ResourceSchema,
        page_limit: int = DEFAULT_PAGE_LIMIT,
    ) -> "ResourceClient[Entity]":
        return cls(
            executor,
            base_url,
            schema.path,
            decode=schema.decode,
            encode=Entity.to_payload,
            select_fields=schema.select_fields,
            search_fields=schema.search_fields,
            page_limit=page_limit,
        )

    @property
    def page_size_header(self) -> str:
        return f"odata.maxpagesize={self.page_limit}"

    def list(self, search_term: str = "") -> PagedResult[T]:
        builder = RequestBuilder("GET", self.resource_url)
        self._add_select(builder)
        filter_query = build_filter(search_term, self.search_fields)
        if filter_query:
            builder.add_query_param(FILTER_PARAM, filter_query, encoded=True)
        builder.add_header("Prefer", self.page_size_header)

        response = self._execute(builder.build())
        return PagedResult.first(self._decode_page(response), self._fetch_page)

    def get(self, record_id: str) -> T:
        builder = RequestBuilder("GET", self.record_url(record_id))
        self._add_select(builder)
        response = self._execute(builder.build())
        return self.decode(decode_json(response.body))

    def create(self, record: T) -> T:
        request = (
            RequestBuilder("POST", self.resource_url, encode_json(self.encode(record)))
            .add_header("Content-Type", "application/json")
            .add_header("Prefer", "return=representation")
            .build()
        )
        response = self._execute(request)
        return self.decode(decode_json(response.body))

    def update(self, record_id: str, record: T) -> None:
        request = (
            RequestBuilder("PATCH", self.record_url(record_id), encode_json(self.encode(record)))
            .add_header("Content-Type", "application/json")
            .build()
        )
        self._execute(request)

    def delete(self, record_id: str) -> None:
        self._execute(RequestBuilder("DELETE", self.record_url(record_id)).build())

    def record_url(self, record_id: str) -> str:
        return f"{self.resource_url}({record_id})"

    def _add_select(self, builder: RequestBuilder) -> None:
        if self.select_fields:
            builder.add_query_param(SELECT_PARAM, ",".join(self.select_fields))

    def _fetch_page(self, next_link: str) -> Page:
        request = RequestBuilder("GET", next_link).add_header("Prefer", self.page_size_header).build()
        return self._decode_page(self._execute(request))

    def _decode_page(self, response: Response) -> Page:
        payload = decode_json(response.body)
        if not isinstance(payload, dict):
            raise SerializationError("collection response is not a JSON object")
        values = payload.get(self.values_field) or []
        if not isinstance(values, list):
            raise SerializationError(f"'{self.values_field}' is not a list")
        next_link = payload.get(self.next_link_field) or ""
        return Page(records=[self.decode(item) for item in values], next_token=str(next_link))

    def _execute(self, request: Request) -> Response:
        logger.debug("%s %s", request.method, request.url)
        response = self.executor(request)
        logger.debug("%s %s -> %s", request.method, request.url, response.status_code)
        if not response.ok:
            message, code = parse_error(response.body)
            logger.warning("%s %s failed with %s: %s", request.method, request.url, response.status_code, message)
            raise RemoteError(message, status_code=response.status_code, code=code)
        return response
