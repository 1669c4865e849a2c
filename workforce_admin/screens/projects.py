from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar

from workforce_admin.client import Project
from workforce_admin.table import CellKind, ColumnDef

from .base import TableScreen, name_lookup, resolve_name
from .roles import PROJECT_DELETE_ROLES, PROJECT_EDIT_ROLES

MISSING = "-"


def _or_missing(value: Any) -> Any:
    return MISSING if value is None or value == "" else value


def project_row(project: Project, names: dict[str, str]) -> dict[str, Any]:
    return {
        "id": project.id,
        "project_name": project.project_name,
        "total_estimate_hrs": project.total_estimate_hrs,
        "total_elapsed_hrs": project.total_elapsed_hrs,
        "assigned_ids": list(project.assigned_ids),
        "assigned_names": [resolve_name(names, identity) for identity in project.assigned_ids],
        "created_by": project.created_by,
        "created_by_name": resolve_name(names, project.created_by),
        "project_subparts": [subpart.model_dump() for subpart in project.project_subparts],
        "is_completed": project.is_completed,
        "created_at": project.created_at,
        "updated_at": project.updated_at,
    }


def project_detail(row: Mapping[str, Any]) -> dict[str, Any]:
    """Flattened view of one project for the detail modal."""
    subparts = row.get("project_subparts") or []
    return {
        "project_name": _or_missing(row.get("project_name")),
        "created_by": _or_missing(row.get("created_by_name")),
        "estimated_hours": _or_missing(row.get("total_estimate_hrs")),
        "elapsed_hours": _or_missing(row.get("total_elapsed_hrs")),
        "created_at": _or_missing(row.get("created_at")),
        "updated_at": _or_missing(row.get("updated_at")),
        "assigned": list(row.get("assigned_names") or []) or "No employees assigned.",
        "subparts": [
            {
                "name": subpart.get("project_subpart_name"),
                "deadline": _or_missing(subpart.get("dead_line")),
                "hours_elapsed": subpart.get("hours_elapsed") if subpart.get("hours_elapsed") is not None else 0,
                "status": "Done" if subpart.get("is_done") else "In Progress",
            }
            for subpart in subparts
        ],
    }


@dataclass
class ProjectsScreen(TableScreen):
    """Projects still in progress."""

    module: ClassVar[str] = "projects"
    title: ClassVar[str] = "Active Projects"
    edit_roles: ClassVar[frozenset[str]] = PROJECT_EDIT_ROLES
    delete_roles: ClassVar[frozenset[str]] = PROJECT_DELETE_ROLES
    completed: ClassVar[bool] = False

    def columns(self) -> Sequence[ColumnDef]:
        return (
            ColumnDef(accessor="project_name", header="Project Name"),
            ColumnDef(accessor="total_estimate_hrs", header="Estimated Hrs"),
            ColumnDef(accessor="total_elapsed_hrs", header="Elapsed Hrs"),
            ColumnDef(accessor="assigned_names", header="Assigned Employees", kind=CellKind.SEQUENCE),
            ColumnDef(accessor="project_subparts", header="Project Subparts", kind=CellKind.RECORDS),
            ColumnDef(accessor="created_by_name", header="Created By"),
            ColumnDef(accessor="created_at", header="Created Date"),
            ColumnDef(accessor="updated_at", header="Updated Date"),
        )

    def fetch_rows(self) -> list[dict[str, Any]]:
        if self.client is None:
            return []
        names = name_lookup(self.client.list_users())
        return [
            project_row(project, names)
            for project in self.client.list_projects()
            if project.is_completed is self.completed
        ]

    def edit_handler(self) -> Callable[[Any, int], Any] | None:
        return lambda row, _index: self.open_modal("edit", row)

    def delete_handler(self) -> Callable[[Any, int], Any] | None:
        return lambda row, _index: self.open_modal("delete", row)

    def view_handler(self) -> Callable[[Any], Any] | None:
        return lambda row: self.open_modal("view", row)

    def detail(self) -> dict[str, Any] | None:
        if self.modal != "view" or self.selected_row is None:
            return None
        return project_detail(self.selected_row)

    def save_edit(self, payload: dict[str, Any]) -> bool:
        if self.client is None or self.selected_row is None:
            return False
        project_id = self.selected_row.get("id")
        client = self.client
        return self.run_mutation(
            "edit",
            lambda: client.update_project(project_id, payload),
            success_message="Project updated",
        )

    def confirm_delete(self) -> bool:
        if self.client is None or self.selected_row is None:
            return False
        project_id = self.selected_row.get("id")
        client = self.client
        return self.run_mutation(
            "delete",
            lambda: client.delete_project(project_id),
            success_message="Project deleted",
        )


@dataclass
class ArchivedProjectsScreen(ProjectsScreen):
    """Completed projects."""

    title: ClassVar[str] = "Archived Projects"
    completed: ClassVar[bool] = True
