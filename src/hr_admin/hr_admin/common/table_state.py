"""Screen-scoped list state as a model/update loop.

A list screen keeps one ``TableState`` and replaces it with
``update(state, action)`` on every user action. The HTTP layer replays the
requested page size and page onto a fresh state (``common.web.page_args``),
so only offered page sizes reach ``paginate``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from ..core.constants import DEFAULT_PAGE_SIZE, PAGE_SIZE_OPTIONS
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class TableState:
    filters: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class SetFilter:
    name: str
    value: Any


@dataclass(frozen=True)
class ClearFilters:
    pass


@dataclass(frozen=True)
class SetPageSize:
    page_size: int


@dataclass(frozen=True)
class NextPage:
    total_pages: int


@dataclass(frozen=True)
class PreviousPage:
    pass


@dataclass(frozen=True)
class GoToPage:
    page: int
    total_pages: Optional[int] = None


Action = Union[SetFilter, ClearFilters, SetPageSize, NextPage, PreviousPage, GoToPage]


def update(state: TableState, action: Action) -> TableState:
    if isinstance(action, SetFilter):
        filters = dict(state.filters)
        filters[action.name] = action.value
        return replace(state, filters=MappingProxyType(filters), page=1)

    if isinstance(action, ClearFilters):
        return replace(state, filters=MappingProxyType({}), page=1)

    if isinstance(action, SetPageSize):
        if action.page_size not in PAGE_SIZE_OPTIONS:
            raise ValidationError(f"Page size must be one of {PAGE_SIZE_OPTIONS}")
        return replace(state, page_size=action.page_size, page=1)

    if isinstance(action, NextPage):
        if state.page < action.total_pages:
            return replace(state, page=state.page + 1)
        return state

    if isinstance(action, PreviousPage):
        if state.page > 1:
            return replace(state, page=state.page - 1)
        return state

    if isinstance(action, GoToPage):
        page = max(action.page, 1)
        if action.total_pages is not None:
            page = min(page, max(action.total_pages, 1))
        return replace(state, page=page)

    raise ValidationError(f"Unsupported table action: {type(action).__name__}")
