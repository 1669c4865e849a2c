from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .columns import ColumnDef, cell_texts, is_sequence_value, read_cell

FilterValue = str | frozenset[str]


@dataclass
class FilterState:
    search: str = ""
    columns: dict[str, FilterValue] = field(default_factory=dict)

    def active_columns(self) -> dict[str, FilterValue]:
        return {accessor: value for accessor, value in self.columns.items() if is_active_filter(value)}

    def is_active(self) -> bool:
        return bool(self.search.strip()) or bool(self.active_columns())

    def clear(self) -> None:
        self.search = ""
        self.columns = {}


def is_active_filter(value: FilterValue | None) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    return bool(value)


def normalize_filter_value(column: ColumnDef, value: Any) -> FilterValue:
    if column.is_multi_select:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            return frozenset({value}) if value else frozenset()
        if isinstance(value, Iterable):
            return frozenset(str(item) for item in value)
        return frozenset({str(value)})
    if value is None:
        return ""
    return str(value)


def matches_search(row: Any, columns: Sequence[ColumnDef], term: str) -> bool:
    probe = (term or "").strip().lower()
    if not probe:
        return True
    for column in columns:
        for text in cell_texts(read_cell(row, column.accessor)):
            if probe in text.lower():
                return True
    return False


def matches_column(row: Any, column: ColumnDef, value: FilterValue) -> bool:
    if not is_active_filter(value):
        return True
    cell = read_cell(row, column.accessor)
    if column.is_multi_select:
        if is_sequence_value(cell):
            return any(column.project(item) in value for item in cell)
        return column.project(cell) in value
    if cell is None:
        return False
    probe = str(value).strip().lower()
    return any(probe in text.lower() for text in cell_texts(cell))


def filter_rows(
    rows: Sequence[Any],
    columns: Sequence[ColumnDef],
    search: str = "",
    column_filters: Mapping[str, FilterValue] | None = None,
) -> list[Any]:
    """Rows passing the global search AND every active column filter, in input order."""
    by_accessor = {column.accessor: column for column in columns}
    active = [
        (by_accessor[accessor], value)
        for accessor, value in (column_filters or {}).items()
        if accessor in by_accessor and is_active_filter(value)
    ]
    return [
        row
        for row in rows
        if matches_search(row, columns, search) and all(matches_column(row, column, value) for column, value in active)
    ]


__all__ = [
    "FilterState",
    "FilterValue",
    "filter_rows",
    "is_active_filter",
    "matches_column",
    "matches_search",
    "normalize_filter_value",
]
