from __future__ import annotations

import pytest

from workforce_admin.exceptions import TableConfigError
from workforce_admin.table.pagination import PaginationState, goto_page, next_page, paginate, prev_page, total_pages


def test_twenty_five_rows_make_three_pages() -> None:
    rows = list(range(1, 26))
    page = paginate(rows, 3, 10)
    assert page.total_pages == 3
    assert page.rows == [21, 22, 23, 24, 25]
    assert page.label == "Page 3 of 3"


@pytest.mark.parametrize(("count", "size", "expected"), [(0, 10, 1), (1, 10, 1), (10, 10, 1), (11, 10, 2), (7, 3, 3)])
def test_total_pages_never_zero(count: int, size: int, expected: int) -> None:
    assert total_pages(count, size) == expected


def test_out_of_range_page_clamps_to_last() -> None:
    rows = list(range(15))
    page = paginate(rows, 9, 10)
    assert page.page == 2
    assert page.rows == list(range(10, 15))
    assert paginate(rows, 0, 10).page == 1


def test_empty_rows_yield_one_empty_page() -> None:
    page = paginate([], 4, 10)
    assert page.page == 1
    assert page.total_pages == 1
    assert page.rows == []
    assert not page.has_next and not page.has_previous


def test_pages_reassemble_the_full_set() -> None:
    rows = [{"id": index} for index in range(23)]
    pages = paginate(rows, 1, 5).total_pages
    rebuilt = [row for number in range(1, pages + 1) for row in paginate(rows, number, 5).rows]
    assert rebuilt == rows


@pytest.mark.parametrize("size", [0, -1, True, 2.5])
def test_invalid_page_size_is_rejected(size) -> None:
    with pytest.raises(TableConfigError):
        paginate([1, 2], 1, size)


def test_navigation_helpers_stay_in_range() -> None:
    state = PaginationState(page=1, page_size=10)
    assert prev_page(state).page == 1
    assert next_page(state, 3).page == 2
    assert next_page(next_page(state, 3), 3).page == 3
    assert goto_page(state, 99, 3).page == 3
    assert goto_page(state, -4, 3).page == 1


def test_pagination_state_rejects_bad_size() -> None:
    with pytest.raises(TableConfigError):
        PaginationState(page_size=0)
