"""Filtering and pagination shared by every list endpoint.

Filters are plain predicates over a single item and compose with ``all_of``;
``paginate`` applies one predicate, an optional ordering and a page window.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Callable, Generic, Iterable, Optional, Sequence, TypeVar

from ..core.constants import DEFAULT_PAGE_SIZE
from ..core.exceptions import ValidationError
from .datetime_utils import week_start

T = TypeVar("T")
Predicate = Callable[[T], bool]


@dataclass(frozen=True)
class Page(Generic[T]):
    items: Sequence[T]
    page: int
    page_size: int
    total_items: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def map(self, fn: Callable[[T], Any]) -> "Page":
        return replace(self, items=[fn(i) for i in self.items])

    def to_dict(self, serialize: Callable[[T], Any] = lambda x: x) -> dict:
        return {
            "items": [serialize(i) for i in self.items],
            "page": self.page,
            "page_size": self.page_size,
            "total_items": self.total_items,
            "total_pages": self.total_pages,
            "has_previous": self.has_previous,
            "has_next": self.has_next,
        }


def paginate(
    predicate: Predicate,
    items: Iterable[T],
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    *,
    sort_key: Optional[Callable[[T], Any]] = None,
    reverse: bool = False,
) -> Page[T]:
    if page_size < 1:
        raise ValidationError("Page size must be at least 1")
    page = max(int(page), 1)

    matched = [i for i in items if predicate(i)]
    if sort_key is not None:
        matched.sort(key=sort_key, reverse=reverse)

    total_pages = math.ceil(len(matched) / page_size)
    offset = (page - 1) * page_size
    return Page(
        items=matched[offset : offset + page_size],
        page=page,
        page_size=page_size,
        total_items=len(matched),
        total_pages=total_pages,
    )


def match_all() -> Predicate:
    return lambda _item: True


def all_of(*predicates: Predicate) -> Predicate:
    return lambda item: all(p(item) for p in predicates)


def contains_text(getter: Callable[[T], Optional[str]], term: Optional[str]) -> Predicate:
    """Case-insensitive substring match; an empty term matches everything."""
    needle = (term or "").strip().lower()
    if not needle:
        return match_all()
    return lambda item: needle in (getter(item) or "").lower()


def equals(getter: Callable[[T], Any], value: Any, *, any_value: str = "All") -> Predicate:
    if value is None or value == "" or value == any_value:
        return match_all()
    return lambda item: getter(item) == value


def on_or_after(getter: Callable[[T], date], start: Optional[date]) -> Predicate:
    if start is None:
        return match_all()
    return lambda item: getter(item) >= start


def on_or_before(getter: Callable[[T], date], end: Optional[date]) -> Predicate:
    if end is None:
        return match_all()
    return lambda item: getter(item) <= end


def date_between(getter: Callable[[T], date], start: Optional[date], end: Optional[date]) -> Predicate:
    return all_of(on_or_after(getter, start), on_or_before(getter, end))


def this_week(getter: Callable[[T], date], today: date) -> Predicate:
    return on_or_after(getter, week_start(today))
