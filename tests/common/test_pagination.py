from dataclasses import dataclass
from datetime import date

import pytest

from src.hr_admin.hr_admin.common.pagination import (
    all_of,
    contains_text,
    date_between,
    equals,
    match_all,
    paginate,
    this_week,
)
from src.hr_admin.hr_admin.core.exceptions import ValidationError


@dataclass(frozen=True)
class Row:
    name: str
    kind: str
    day: date


ROWS = [Row(f"row {i}", "A" if i % 2 else "B", date(2024, 5, i)) for i in range(1, 13)]


def test_paginate_counts_pages_with_ceiling():
    page = paginate(match_all(), ROWS, page=1, page_size=5)
    assert page.total_items == 12
    assert page.total_pages == 3
    assert [r.name for r in page.items] == ["row 1", "row 2", "row 3", "row 4", "row 5"]
    assert not page.has_previous
    assert page.has_next


def test_last_page_is_partial():
    page = paginate(match_all(), ROWS, page=3, page_size=5)
    assert [r.name for r in page.items] == ["row 11", "row 12"]
    assert page.has_previous
    assert not page.has_next


def test_empty_result_has_zero_pages():
    page = paginate(lambda r: False, ROWS, page=1, page_size=5)
    assert page.items == []
    assert page.total_pages == 0
    assert not page.has_next


def test_page_below_one_is_first_page():
    assert paginate(match_all(), ROWS, page=0, page_size=5).page == 1


def test_page_size_must_be_positive():
    with pytest.raises(ValidationError):
        paginate(match_all(), ROWS, page=1, page_size=0)


def test_sort_key_and_reverse():
    page = paginate(match_all(), ROWS, page=1, page_size=2, sort_key=lambda r: r.day, reverse=True)
    assert [r.day.day for r in page.items] == [12, 11]


def test_equals_treats_all_as_wildcard():
    assert paginate(equals(lambda r: r.kind, "All"), ROWS).total_items == 12
    assert paginate(equals(lambda r: r.kind, "A"), ROWS).total_items == 6


def test_contains_text_is_case_insensitive():
    assert paginate(contains_text(lambda r: r.name, "ROW 1"), ROWS).total_items == 4  # 1, 10, 11, 12
    assert paginate(contains_text(lambda r: r.name, "  "), ROWS).total_items == 12


def test_date_between_is_inclusive_with_open_bounds():
    assert paginate(date_between(lambda r: r.day, date(2024, 5, 3), date(2024, 5, 5)), ROWS).total_items == 3
    assert paginate(date_between(lambda r: r.day, None, date(2024, 5, 2)), ROWS).total_items == 2


def test_this_week_starts_on_sunday(fixed_today):
    page = paginate(this_week(lambda r: r.day, fixed_today), ROWS, page_size=50)
    assert min(r.day for r in page.items) == date(2024, 5, 5)


def test_all_of_combines_predicates():
    pred = all_of(equals(lambda r: r.kind, "B"), date_between(lambda r: r.day, date(2024, 5, 1), date(2024, 5, 6)))
    assert [r.day.day for r in paginate(pred, ROWS).items] == [2, 4, 6]


def test_page_map_and_to_dict():
    page = paginate(match_all(), ROWS, page=2, page_size=5).map(lambda r: r.name)
    data = page.to_dict()
    assert data["items"] == ["row 6", "row 7", "row 8", "row 9", "row 10"]
    assert data["page"] == 2
    assert data["total_pages"] == 3
    assert data["has_previous"] is True
