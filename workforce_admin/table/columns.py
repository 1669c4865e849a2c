"""Column schema for the generic data table.

A column says how to read one field out of a row, how to label it, how to
render it, which filter widget it gets and, optionally, how its values rank
when sorted. Columns carry no state and are validated once at construction.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from workforce_admin.exceptions import ColumnDefinitionError

logger = logging.getLogger(__name__)

PLACEHOLDER = "N/A"

Row = Mapping[str, Any]
RenderFn = Callable[[Row, int], Any]


class CellKind(str, Enum):
    EMPTY = "empty"
    SCALAR = "scalar"
    SEQUENCE = "sequence"
    RECORDS = "records"


class FilterType(str, Enum):
    TEXT = "text"
    MULTI_SELECT = "multi-select"


@dataclass(frozen=True)
class ValueRender:
    """Show the raw accessor value."""

    kind: str = "value"


@dataclass(frozen=True)
class CustomRender:
    """Show whatever ``render(row, index)`` returns."""

    render: RenderFn
    kind: str = "custom"


RenderSpec = Union[ValueRender, CustomRender]


@dataclass(frozen=True)
class ColumnDef:
    accessor: str
    header: str
    render: RenderSpec = field(default_factory=ValueRender)
    filter_type: FilterType = FilterType.TEXT
    options: tuple[str, ...] = ()
    filter_value: Callable[[Any], str] | None = None
    ranks: Mapping[str, int] | None = None
    kind: CellKind | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.accessor, str) or not self.accessor.strip():
            raise ColumnDefinitionError(f"Column accessor must be a non-empty string, got {self.accessor!r}")
        if not isinstance(self.header, str) or not self.header.strip():
            raise ColumnDefinitionError(f"Column {self.accessor!r} needs a non-empty header")

        render = self.render
        if render is None:
            render = ValueRender()
        elif callable(render) and not isinstance(render, (ValueRender, CustomRender)):
            render = CustomRender(render=render)
        if not isinstance(render, (ValueRender, CustomRender)):
            raise ColumnDefinitionError(f"Column {self.accessor!r} has an unsupported render {render!r}")
        object.__setattr__(self, "render", render)

        try:
            filter_type = FilterType(self.filter_type)
        except ValueError as exc:
            raise ColumnDefinitionError(
                f"Column {self.accessor!r} has unknown filter type {self.filter_type!r}"
            ) from exc
        object.__setattr__(self, "filter_type", filter_type)

        options = tuple(str(option) for option in (self.options or ()))
        if filter_type is FilterType.MULTI_SELECT and not options:
            raise ColumnDefinitionError(f"Multi-select column {self.accessor!r} requires options")
        object.__setattr__(self, "options", options)

        if self.kind is not None:
            object.__setattr__(self, "kind", CellKind(self.kind))

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "ColumnDef":
        if not isinstance(payload, Mapping):
            raise ColumnDefinitionError(f"Column definition must be a mapping, got {type(payload).__name__}")
        return cls(
            accessor=payload.get("accessor"),  # type: ignore[arg-type]
            header=payload.get("header"),  # type: ignore[arg-type]
            render=payload.get("render"),  # type: ignore[arg-type]
            filter_type=payload.get("filter_type") or payload.get("filterType") or FilterType.TEXT,
            options=tuple(payload.get("options") or ()),
            filter_value=payload.get("filter_value"),
            ranks=payload.get("ranks"),
            kind=payload.get("kind"),
        )

    @property
    def is_multi_select(self) -> bool:
        return self.filter_type is FilterType.MULTI_SELECT

    def project(self, value: Any) -> str:
        """Canonical label of ``value`` used by multi-select filters."""
        if self.filter_value is not None:
            try:
                return str(self.filter_value(value))
            except Exception:
                logger.warning(
                    "table_filter_projection_failed",
                    exc_info=True,
                    extra={"accessor": self.accessor},
                )
        return stringify(value)


def normalize_columns(columns: Iterable[ColumnDef | Mapping[str, Any]]) -> tuple[ColumnDef, ...]:
    normalized: list[ColumnDef] = []
    seen: set[str] = set()
    for column in columns:
        resolved = column if isinstance(column, ColumnDef) else ColumnDef.from_mapping(column)
        if resolved.accessor in seen:
            raise ColumnDefinitionError(f"Duplicate column accessor {resolved.accessor!r}")
        seen.add(resolved.accessor)
        normalized.append(resolved)
    return tuple(normalized)


def read_cell(row: Any, accessor: str) -> Any:
    if isinstance(row, Mapping):
        return row.get(accessor)
    return getattr(row, accessor, None)


def is_sequence_value(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def classify_cell(value: Any, declared: CellKind | None = None) -> CellKind:
    if value is None:
        return CellKind.EMPTY
    if declared is not None and declared is not CellKind.EMPTY:
        return declared
    if is_sequence_value(value):
        if any(isinstance(item, Mapping) for item in value):
            return CellKind.RECORDS
        return CellKind.SEQUENCE
    return CellKind.SCALAR


def stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Mapping):
        return ", ".join(f"{key}: {stringify(item)}" for key, item in value.items())
    if is_sequence_value(value):
        return ", ".join(stringify(item) for item in value)
    return str(value)


def cell_texts(value: Any) -> list[str]:
    """Stringified candidates of a cell for substring matching."""
    if value is None:
        return []
    if is_sequence_value(value):
        return [stringify(item) for item in value if item is not None]
    return [stringify(value)]


__all__ = [
    "PLACEHOLDER",
    "CellKind",
    "ColumnDef",
    "CustomRender",
    "FilterType",
    "RenderSpec",
    "Row",
    "ValueRender",
    "cell_texts",
    "classify_cell",
    "is_sequence_value",
    "normalize_columns",
    "read_cell",
    "stringify",
]
