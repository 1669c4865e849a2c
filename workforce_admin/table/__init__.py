from .actions import ActionGate, ClickTarget, RowActions, gate_action
from .columns import PLACEHOLDER, CellKind, ColumnDef, CustomRender, FilterType, ValueRender, classify_cell, stringify
from .engine import DEFAULT_PAGE_SIZE, DataTable
from .export import build_csv, csv_bytes, export_csv, export_filename
from .filtering import FilterState, filter_rows
from .pagination import Page, PaginationState, paginate, total_pages
from .shell import TableShell, render_cell, row_key
from .sorting import PRIORITY_RANK, SortDirection, SortState, compare_values, sort_rows

__all__ = [
    "ActionGate",
    "CellKind",
    "ClickTarget",
    "ColumnDef",
    "CustomRender",
    "DEFAULT_PAGE_SIZE",
    "DataTable",
    "FilterState",
    "FilterType",
    "PLACEHOLDER",
    "PRIORITY_RANK",
    "Page",
    "PaginationState",
    "RowActions",
    "SortDirection",
    "SortState",
    "TableShell",
    "ValueRender",
    "build_csv",
    "classify_cell",
    "compare_values",
    "csv_bytes",
    "export_csv",
    "export_filename",
    "filter_rows",
    "gate_action",
    "paginate",
    "render_cell",
    "row_key",
    "sort_rows",
    "stringify",
    "total_pages",
]
