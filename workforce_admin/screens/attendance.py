from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar

from workforce_admin.client import AttendanceRecord
from workforce_admin.table import ColumnDef

from .base import TableScreen, name_lookup, resolve_name
from .roles import ATTENDANCE_DELETE_ROLES, ATTENDANCE_EDIT_ROLES, ATTENDANCE_VIEW_ALL_ROLES

logger = logging.getLogger(__name__)

TIME_FORMATS = ("%H:%M:%S", "%H:%M")


def parse_clock(value: str | None) -> datetime | None:
    if not value:
        return None
    text = value.strip()
    if "T" in text:
        text = text.split("T", 1)[1]
    text = text[:8]
    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    logger.warning("attendance_time_unparsed", extra={"value": value})
    return None


def working_hours(in_time: str | None, out_time: str | None) -> str:
    """Hours between clock-in and clock-out, two decimals; blank when incomplete."""
    start = parse_clock(in_time)
    end = parse_clock(out_time)
    if start is None or end is None:
        return ""
    minutes = (end - start).total_seconds() / 60
    return f"{minutes / 60:.2f}"


def attendance_row(record: AttendanceRecord, names: dict[str, str]) -> dict[str, Any]:
    date_text = (record.date or "")[:10]
    row = record.model_dump()
    row.update(
        {
            "title": f"{record.employee_id}-{date_text}",
            "date": date_text,
            "employee_name": resolve_name(names, record.employee_id),
            "working_hours": working_hours(record.in_time, record.out_time),
        }
    )
    return row


@dataclass
class AttendanceScreen(TableScreen):
    employee_id: str | None = None

    module: ClassVar[str] = "attendance"
    title: ClassVar[str] = "Attendance"
    edit_roles: ClassVar[frozenset[str]] = ATTENDANCE_EDIT_ROLES
    delete_roles: ClassVar[frozenset[str]] = ATTENDANCE_DELETE_ROLES

    def columns(self) -> Sequence[ColumnDef]:
        return (
            ColumnDef(accessor="title", header="Title"),
            ColumnDef(accessor="date", header="Date"),
            ColumnDef(accessor="employee_name", header="Employee Name"),
            ColumnDef(accessor="in_time", header="Start Time"),
            ColumnDef(accessor="out_time", header="End Time"),
            ColumnDef(accessor="working_hours", header="Work Hours"),
        )

    @property
    def sees_everyone(self) -> bool:
        return self.user_role in ATTENDANCE_VIEW_ALL_ROLES

    def fetch_rows(self) -> list[dict[str, Any]]:
        if self.client is None:
            return []
        names = name_lookup(self.client.list_users(), key="employee_id")
        if self.sees_everyone:
            records = self.client.list_attendance()
        elif self.employee_id:
            records = self.client.list_attendance(employee_id=self.employee_id)
        else:
            return []
        rows = [attendance_row(record, names) for record in records]
        rows.sort(key=lambda row: row["date"], reverse=True)
        return rows

    def edit_handler(self) -> Callable[[Any, int], Any] | None:
        return lambda row, _index: self.open_modal("edit", row)

    def delete_handler(self) -> Callable[[Any, int], Any] | None:
        return lambda row, _index: self.open_modal("delete", row)

    def save_edit(self, payload: dict[str, Any]) -> bool:
        if self.client is None or self.selected_row is None:
            return False
        record_id = self.selected_row.get("id")
        client = self.client
        return self.run_mutation(
            "edit",
            lambda: client.update_attendance(record_id, payload),
            success_message="Attendance updated",
        )

    def confirm_delete(self) -> bool:
        if self.client is None or self.selected_row is None:
            return False
        record_id = self.selected_row.get("id")
        client = self.client
        return self.run_mutation(
            "delete",
            lambda: client.delete_attendance(record_id),
            success_message="Attendance deleted",
        )
