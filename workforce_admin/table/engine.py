from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from workforce_admin.exceptions import ColumnDefinitionError

from .columns import ColumnDef, normalize_columns
from .filtering import FilterState, filter_rows, normalize_filter_value
from .pagination import Page, PaginationState, goto_page, next_page, paginate, prev_page
from .sorting import SortDirection, SortState, sort_rows

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 10


class DataTable:
    """Client-side search, filter, sort and pagination over a caller-owned row set.

    Every input change runs the whole pipeline synchronously:
    filter -> sort -> paginate (clamping the current page). Changing the
    search text, a column filter or the sort resets to page 1; replacing the
    rows keeps the current page unless it no longer exists.
    """

    def __init__(
        self,
        rows: Iterable[Any] | None,
        columns: Iterable[ColumnDef | Mapping[str, Any]],
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        title: str | None = None,
    ) -> None:
        self.columns: tuple[ColumnDef, ...] = normalize_columns(columns)
        if not self.columns:
            raise ColumnDefinitionError("A table needs at least one column")
        self._by_accessor = {column.accessor: column for column in self.columns}
        self.title = title
        self.filters = FilterState()
        self.sort = SortState()
        self.pagination = PaginationState(page=1, page_size=page_size)
        self._rows: list[Any] = list(rows or [])
        self._processed: list[Any] = []
        self._page = Page(page_size=page_size)
        self._recompute(reset_page=True)

    @property
    def rows(self) -> list[Any]:
        return list(self._rows)

    @property
    def page_size(self) -> int:
        return self.pagination.page_size

    @property
    def processed_rows(self) -> list[Any]:
        """The filtered and sorted row set, across all pages."""
        return list(self._processed)

    @property
    def page(self) -> Page:
        return self._page

    @property
    def current_page(self) -> int:
        return self._page.page

    @property
    def total_pages(self) -> int:
        return self._page.total_pages

    def column(self, accessor: str) -> ColumnDef | None:
        return self._by_accessor.get(accessor)

    def set_rows(self, rows: Iterable[Any] | None) -> Page:
        self._rows = list(rows or [])
        return self._recompute(reset_page=False)

    def set_search(self, term: str | None) -> Page:
        self.filters.search = term or ""
        return self._recompute(reset_page=True)

    def set_column_filter(self, accessor: str, value: Any) -> Page:
        column = self._by_accessor.get(accessor)
        if column is None:
            logger.warning("table_filter_unknown_column", extra={"accessor": accessor, "title": self.title})
            return self._page
        self.filters.columns[accessor] = normalize_filter_value(column, value)
        return self._recompute(reset_page=True)

    def toggle_filter_option(self, accessor: str, option: str) -> Page:
        column = self._by_accessor.get(accessor)
        if column is None or not column.is_multi_select:
            logger.warning("table_filter_option_ignored", extra={"accessor": accessor, "option": option})
            return self._page
        current = self.filters.columns.get(accessor) or frozenset()
        selected = set(current) if isinstance(current, frozenset) else set()
        if option in selected:
            selected.discard(option)
        else:
            selected.add(option)
        return self.set_column_filter(accessor, selected)

    def clear_filters(self) -> Page:
        self.filters.clear()
        return self._recompute(reset_page=True)

    def toggle_sort(self, accessor: str) -> Page:
        if accessor not in self._by_accessor:
            logger.warning("table_sort_unknown_column", extra={"accessor": accessor, "title": self.title})
            return self._page
        self.sort.toggle(accessor)
        return self._recompute(reset_page=True)

    def set_sort(self, accessor: str | None, direction: SortDirection | str = SortDirection.ASC) -> Page:
        if accessor is not None and accessor not in self._by_accessor:
            logger.warning("table_sort_unknown_column", extra={"accessor": accessor, "title": self.title})
            return self._page
        try:
            resolved = SortDirection(direction)
        except ValueError:
            logger.warning("table_sort_unknown_direction", extra={"direction": str(direction)})
            return self._page
        self.sort.accessor = accessor
        self.sort.direction = resolved
        return self._recompute(reset_page=True)

    def clear_sort(self) -> Page:
        self.sort.clear()
        return self._recompute(reset_page=True)

    def next_page(self) -> Page:
        next_page(self.pagination, self._page.total_pages)
        return self._repaginate()

    def prev_page(self) -> Page:
        prev_page(self.pagination)
        return self._repaginate()

    def goto_page(self, page: int) -> Page:
        goto_page(self.pagination, page, self._page.total_pages)
        return self._repaginate()

    def _repaginate(self) -> Page:
        self._page = paginate(self._processed, self.pagination.page, self.page_size)
        return self._page

    def absolute_index(self, position: int) -> int:
        return self._page.offset + position

    def _recompute(self, *, reset_page: bool) -> Page:
        filtered = filter_rows(self._rows, self.columns, self.filters.search, self.filters.columns)
        self._processed = sort_rows(filtered, self.sort.accessor, self.sort.direction, self.columns)
        requested = 1 if reset_page else self.pagination.page
        self._page = paginate(self._processed, requested, self.page_size)
        if self._page.page != requested:
            logger.debug(
                "table_page_clamped",
                extra={"requested": requested, "page": self._page.page, "title": self.title},
            )
        self.pagination.page = self._page.page
        return self._page


__all__ = ["DEFAULT_PAGE_SIZE", "DataTable"]
