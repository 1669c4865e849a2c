from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .actions import ClickTarget, RowActions
from .columns import PLACEHOLDER, CellKind, ColumnDef, CustomRender, classify_cell, read_cell, stringify
from .engine import DataTable
from .export import csv_bytes, export_csv
from .sorting import SortDirection

logger = logging.getLogger(__name__)

SORT_INDICATORS = {SortDirection.ASC: "▲", SortDirection.DESC: "▼"}


def row_key(row: Any, position: int) -> str:
    """Rendering key for a row: its ``id`` or a position+content digest.

    The fallback is not unique: identical rows at the same page position
    share a key.
    """
    identity = read_cell(row, "id")
    if identity is not None and identity != "":
        return str(identity)
    try:
        serialized = json.dumps(row, sort_keys=True, default=str)
    except (TypeError, ValueError):
        serialized = repr(row)
    digest = hashlib.sha1(serialized.encode("utf-8")).hexdigest()[:12]
    return f"{position}-{digest}"


def display_value(value: Any, kind: CellKind) -> Any:
    if kind is CellKind.EMPTY:
        return PLACEHOLDER
    if kind is CellKind.SEQUENCE:
        return [stringify(item) for item in value]
    if kind is CellKind.RECORDS:
        return [dict(item) if isinstance(item, Mapping) else {"value": stringify(item)} for item in value]
    return value


def render_cell(column: ColumnDef, row: Any, index: int) -> dict[str, Any]:
    value = read_cell(row, column.accessor)
    kind = classify_cell(value, column.kind)
    if isinstance(column.render, CustomRender):
        try:
            return {"accessor": column.accessor, "kind": "custom", "display": column.render.render(row, index)}
        except Exception:
            logger.warning(
                "table_cell_render_failed",
                exc_info=True,
                extra={"accessor": column.accessor, "index": index},
            )
    return {"accessor": column.accessor, "kind": kind.value, "display": display_value(value, kind)}


@dataclass
class TableShell:
    table: DataTable
    actions: RowActions = field(default_factory=RowActions)
    caption: str | None = None
    footer_labels: Sequence[str] | None = None
    export_dir: str | Path = "exports"

    def render(self) -> dict[str, Any]:
        page = self.table.page
        can_edit = self.actions.can_edit
        can_delete = self.actions.can_delete
        return {
            "title": self.table.title,
            "caption": self.caption,
            "controls": {"search": self.table.filters.search, "export_label": "Download CSV"},
            "header": self._header(can_edit, can_delete),
            "filters": [self._filter_input(column) for column in self.table.columns],
            "actions": {"edit": can_edit, "delete": can_delete, "view": self.actions.can_view},
            "body": [
                {
                    "key": row_key(row, position),
                    "index": page.offset + position,
                    "cells": [render_cell(column, row, page.offset + position) for column in self.table.columns],
                }
                for position, row in enumerate(page.rows)
            ],
            "footer": {
                "label": page.label,
                "page": page.page,
                "total_pages": page.total_pages,
                "has_previous": page.has_previous,
                "has_next": page.has_next,
                "totals": list(self.footer_labels) if self.footer_labels else None,
            },
            "total": page.total,
            "empty": not page.rows,
        }

    def click(self, position: int, target: ClickTarget | str = ClickTarget.ROW) -> bool:
        rows = self.table.page.rows
        if not 0 <= position < len(rows):
            logger.warning("table_click_out_of_range", extra={"position": position, "rows": len(rows)})
            return False
        return self.actions.dispatch(target, rows[position], self.table.absolute_index(position))

    def csv(self) -> bytes:
        return csv_bytes(self.table.processed_rows, self.table.columns)

    def download_csv(self, output_dir: str | Path | None = None) -> Path:
        return export_csv(
            self.table.processed_rows,
            self.table.columns,
            title=self.table.title,
            output_dir=output_dir or self.export_dir,
        )

    def _header(self, can_edit: bool, can_delete: bool) -> list[dict[str, Any]]:
        sort = self.table.sort
        header = []
        for column in self.table.columns:
            active = sort.accessor == column.accessor
            header.append(
                {
                    "accessor": column.accessor,
                    "label": column.header,
                    "sortable": True,
                    "sort": sort.direction.value if active else None,
                    "indicator": SORT_INDICATORS[sort.direction] if active else "",
                }
            )
        if can_edit:
            header.append({"accessor": None, "label": "Edit", "sortable": False, "sort": None, "indicator": ""})
        if can_delete:
            header.append({"accessor": None, "label": "Delete", "sortable": False, "sort": None, "indicator": ""})
        return header

    def _filter_input(self, column: ColumnDef) -> dict[str, Any]:
        current = self.table.filters.columns.get(column.accessor)
        if column.is_multi_select:
            selected = current if isinstance(current, frozenset) else frozenset()
            return {
                "accessor": column.accessor,
                "type": column.filter_type.value,
                "options": [{"value": option, "selected": option in selected} for option in column.options],
            }
        return {
            "accessor": column.accessor,
            "type": column.filter_type.value,
            "value": current if isinstance(current, str) else "",
            "placeholder": f"Filter {column.header}",
        }


__all__ = ["SORT_INDICATORS", "TableShell", "display_value", "render_cell", "row_key"]
