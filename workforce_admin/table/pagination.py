from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from workforce_admin.exceptions import TableConfigError


@dataclass
class PaginationState:
    page: int = 1
    page_size: int = 10

    def __post_init__(self) -> None:
        validate_page_size(self.page_size)


@dataclass(frozen=True)
class Page:
    rows: list[Any] = field(default_factory=list)
    page: int = 1
    page_size: int = 10
    total: int = 0
    total_pages: int = 1

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def label(self) -> str:
        return f"Page {self.page} of {self.total_pages}"


def validate_page_size(page_size: int) -> int:
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
        raise TableConfigError(f"page_size must be a positive integer, got {page_size!r}")
    return page_size


def total_pages(count: int, page_size: int) -> int:
    return max(1, math.ceil(count / page_size))


def clamp_page(page: int, pages: int) -> int:
    return min(max(1, page), max(1, pages))


def paginate(rows: Sequence[Any], page: int, page_size: int) -> Page:
    validate_page_size(page_size)
    pages = total_pages(len(rows), page_size)
    current = clamp_page(page, pages)
    start = (current - 1) * page_size
    return Page(
        rows=list(rows[start : start + page_size]),
        page=current,
        page_size=page_size,
        total=len(rows),
        total_pages=pages,
    )


def next_page(state: PaginationState, pages: int) -> PaginationState:
    state.page = clamp_page(state.page + 1, pages)
    return state


def prev_page(state: PaginationState) -> PaginationState:
    state.page = max(1, state.page - 1)
    return state


def goto_page(state: PaginationState, page: int, pages: int) -> PaginationState:
    state.page = clamp_page(page, pages)
    return state


__all__ = [
    "Page",
    "PaginationState",
    "clamp_page",
    "goto_page",
    "next_page",
    "paginate",
    "prev_page",
    "total_pages",
    "validate_page_size",
]
