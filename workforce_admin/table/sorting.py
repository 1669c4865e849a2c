"""Single-column, type-aware, stable sorting.

Values are compared through a chain of comparators. Each comparator returns
-1, 0 or 1 when it applies to both values and ``None`` when it does not,
handing the pair to the next one: numeric, then ordinal domain, then text.
"""
from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key
from typing import Any

from .columns import ColumnDef, is_sequence_value, read_cell

Comparator = Callable[[Any, Any], "int | None"]

PRIORITY_RANK: Mapping[str, int] = {"High": 1, "Medium": 2, "Low": 3}
ORDINAL_DOMAINS: tuple[Mapping[str, int], ...] = (PRIORITY_RANK,)


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"

    @property
    def sign(self) -> int:
        return 1 if self is SortDirection.ASC else -1

    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


@dataclass
class SortState:
    accessor: str | None = None
    direction: SortDirection = SortDirection.ASC

    def toggle(self, accessor: str) -> None:
        if self.accessor == accessor:
            self.direction = self.direction.flipped()
            return
        self.accessor = accessor
        self.direction = SortDirection.ASC

    def clear(self) -> None:
        self.accessor = None
        self.direction = SortDirection.ASC


def _sign(delta: float) -> int:
    return (delta > 0) - (delta < 0)


def _cmp(left: str, right: str) -> int:
    return (left > right) - (left < right)


def as_number(value: Any) -> float | None:
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return number


def compare_numeric(a: Any, b: Any) -> int | None:
    left = as_number(a)
    right = as_number(b)
    if left is None or right is None:
        return None
    return _sign(left - right)


def ordinal_comparator(domains: Sequence[Mapping[str, int]]) -> Comparator:
    def compare_ordinal(a: Any, b: Any) -> int | None:
        if not isinstance(a, str) or not isinstance(b, str):
            return None
        for ranks in domains:
            if a in ranks and b in ranks:
                return _sign(ranks[a] - ranks[b])
        return None

    return compare_ordinal


compare_ordinal = ordinal_comparator(ORDINAL_DOMAINS)


def compare_text(a: Any, b: Any) -> int:
    left = str(a)
    right = str(b)
    primary = _cmp(left.casefold(), right.casefold())
    if primary:
        return primary
    # lowercase before uppercase on case-only differences
    return _cmp(left.swapcase(), right.swapcase())


# Columns mixing numeric and free-text cells get no total order: "2" < "10"
# numerically, "10" < "1a" and "1a" < "2" as text, so the sorted order of such
# cells depends on their input order.
DEFAULT_CHAIN: tuple[Comparator, ...] = (compare_numeric, compare_ordinal, compare_text)


def sort_value(value: Any) -> Any:
    # TODO: sequence cells sort by length only; compare by content once an element sort key exists
    if is_sequence_value(value):
        return len(value)
    return value


def compare_values(a: Any, b: Any, chain: Sequence[Comparator] = DEFAULT_CHAIN) -> int:
    left = sort_value(a)
    right = sort_value(b)
    if left is None and right is None:
        return 0
    if left is None:
        return -1
    if right is None:
        return 1
    for comparator in chain:
        result = comparator(left, right)
        if result is not None:
            return result
    return 0


def chain_for(column: ColumnDef | None) -> tuple[Comparator, ...]:
    if column is None or not column.ranks:
        return DEFAULT_CHAIN
    return (compare_numeric, ordinal_comparator((column.ranks, *ORDINAL_DOMAINS)), compare_text)


def sort_rows(
    rows: Sequence[Any],
    accessor: str | None,
    direction: SortDirection | str = SortDirection.ASC,
    columns: Sequence[ColumnDef] | None = None,
) -> list[Any]:
    if not accessor:
        return list(rows)
    sign = SortDirection(direction).sign
    column = next((item for item in columns or () if item.accessor == accessor), None)
    chain = chain_for(column)

    def _compare(left: Any, right: Any) -> int:
        return sign * compare_values(read_cell(left, accessor), read_cell(right, accessor), chain)

    return sorted(rows, key=cmp_to_key(_compare))


__all__ = [
    "DEFAULT_CHAIN",
    "ORDINAL_DOMAINS",
    "PRIORITY_RANK",
    "SortDirection",
    "SortState",
    "as_number",
    "compare_numeric",
    "compare_ordinal",
    "compare_text",
    "compare_values",
    "ordinal_comparator",
    "sort_rows",
]
