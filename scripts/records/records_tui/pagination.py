"""Cursor-based page chain over a collection endpoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Generic, Iterator, Sequence, TypeVar

from records_tui.errors import NoDataError

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    """One decoded collection response."""

    records: Sequence[T] = field(default_factory=tuple)
    next_token: str = ""


FetchPage = Callable[[str], Page]


class PagedResult(Generic[T]):
    """A fetched page plus a link back to the page it was reached from.

    ``next()`` performs exactly one fetch and returns a new object whose
    ``previous_page()`` is this one; walking back never refetches. The
    history is an unbounded singly linked chain.
    """

    def __init__(
        self,
        records: Sequence[T],
        next_token: str,
        fetch_next: FetchPage,
        previous: "PagedResult[T] | None" = None,
    ) -> None:
        self._records = tuple(records)
        self._next_token = next_token or ""
        self._fetch_next = fetch_next
        self._previous = previous

    @classmethod
    def first(cls, page: Page, fetch_next: FetchPage) -> "PagedResult[T]":
        return cls(page.records, page.next_token, fetch_next)

    @property
    def records(self) -> tuple[T, ...]:
        return self._records

    @property
    def next_token(self) -> str:
        return self._next_token

    def has_next(self) -> bool:
        return self._next_token != ""

    def has_previous(self) -> bool:
        return self._previous is not None

    def next(self) -> "PagedResult[T]":
        if not self.has_next():
            raise NoDataError("no further page to fetch")
        page = self._fetch_next(self._next_token)
        return PagedResult(page.records, page.next_token, self._fetch_next, previous=self)

    def previous_page(self) -> "PagedResult[T] | None":
        return self._previous

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[T]:
        return iter(self._records)

    def __bool__(self) -> bool:
        return True
