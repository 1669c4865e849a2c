from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar

from workforce_admin.client import WorkEntry
from workforce_admin.table import ColumnDef, FilterType

from .base import TableScreen, name_lookup, resolve_name
from .roles import ALL_ROLES, WORK_ENTRY_VIEW_ALL_ROLES

DONE = "Done"
NOT_DONE = "Not Done"


def done_label(value: Any) -> str:
    return DONE if value else NOT_DONE


def render_done(row: Mapping[str, Any], _index: int) -> str:
    return done_label(row.get("is_done"))


def render_issues(row: Mapping[str, Any], _index: int) -> list[str] | str:
    issues = row.get("issues") or []
    if not issues:
        return "None"
    return [f"{issue.get('severity')}: {issue.get('issue')}" for issue in issues]


def _hours(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def work_entry_stats(rows: Iterable[Mapping[str, Any]]) -> dict[str, Any]:
    """Summary cards shown above the work entry table."""
    entries = list(rows)
    total = len(entries)
    total_hours = round(sum(_hours(entry.get("hours_elapsed")) for entry in entries), 2)
    average = round(total_hours / total, 2) if total else 0.0
    done = sum(1 for entry in entries if entry.get("is_done"))
    pending = total - done
    if pending == 0:
        tone = "green"
    elif pending > done:
        tone = "red"
    else:
        tone = "yellow"
    return {
        "total_entries": total,
        "total_hours": f"{total_hours:.2f}",
        "average_hours": f"{average:.2f}",
        "done": done,
        "pending": pending,
        "tone": tone,
    }


def work_entry_row(entry: WorkEntry, names: dict[str, str]) -> dict[str, Any]:
    row = entry.model_dump()
    row["assigned_by_name"] = resolve_name(names, entry.assigned_by)
    row["assigned_to_name"] = resolve_name(names, entry.assigned_to)
    return row


@dataclass
class WorkEntriesScreen(TableScreen):
    user_id: int | str | None = None

    module: ClassVar[str] = "work_entries"
    title: ClassVar[str] = "Work Entries"
    edit_roles: ClassVar[frozenset[str]] = frozenset(ALL_ROLES)

    def columns(self) -> Sequence[ColumnDef]:
        return (
            ColumnDef(accessor="work_date", header="Work Date"),
            ColumnDef(accessor="project_name", header="Project Name"),
            ColumnDef(accessor="project_subpart", header="Project Subpart"),
            ColumnDef(accessor="hours_elapsed", header="Hours Elapsed"),
            ColumnDef(
                accessor="is_done",
                header="Is Done",
                render=render_done,
                filter_type=FilterType.MULTI_SELECT,
                options=(DONE, NOT_DONE),
                filter_value=done_label,
            ),
            ColumnDef(accessor="issues", header="Issues", render=render_issues),
            ColumnDef(accessor="assigned_by_name", header="Assigned By"),
            ColumnDef(accessor="assigned_to_name", header="Assigned To"),
        )

    def fetch_rows(self) -> list[dict[str, Any]]:
        if self.client is None:
            return []
        names = name_lookup(self.client.list_users())
        if self.user_role in WORK_ENTRY_VIEW_ALL_ROLES:
            entries = self.client.list_work_entries()
        elif self.user_id is not None:
            entries = self.client.list_work_entries(user_id=self.user_id, assigned_to=self.user_id)
        else:
            return []
        rows = [work_entry_row(entry, names) for entry in entries]
        rows.sort(key=lambda row: row.get("work_date") or "", reverse=True)
        return rows

    def stats(self) -> dict[str, Any]:
        return work_entry_stats(self.table.processed_rows)

    def edit_handler(self) -> Callable[[Any, int], Any] | None:
        return lambda row, _index: self.open_modal("edit", row)

    def save_edit(self, payload: dict[str, Any]) -> bool:
        if self.client is None or self.selected_row is None:
            return False
        entry_id = self.selected_row.get("id")
        client = self.client
        return self.run_mutation(
            "edit",
            lambda: client.update_work_entry(entry_id, payload),
            success_message="Work entry updated",
        )

    def render(self) -> dict[str, Any]:
        payload = super().render()
        payload["stats"] = self.stats()
        return payload
