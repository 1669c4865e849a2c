from __future__ import annotations

from typing import Any

import pytest

from workforce_admin.client import AttendanceRecord, Employee, Project, UserSummary, WorkEntry
from workforce_admin.config import AdminConfig
from workforce_admin.exceptions import ServerError
from workforce_admin.screens import (
    ArchivedProjectsScreen,
    AttendanceScreen,
    EmployeesScreen,
    ProjectsScreen,
    WorkEntriesScreen,
    project_detail,
    work_entry_stats,
    working_hours,
)


class FakeAdminClient:
    def __init__(self) -> None:
        self.calls: list[tuple[str, Any]] = []
        self.fail_loads = False
        self.users = [
            UserSummary(id=1, employee_id="E1", full_name="Ana Ruiz", role="Admin"),
            UserSummary(id=2, employee_id="E2", full_name="Sam Admington", role="Employee"),
        ]
        self.attendance = [
            AttendanceRecord(id=10, employee_id="E1", date="2024-05-01T00:00:00", in_time="09:00:00", out_time="17:30:00"),
            AttendanceRecord(id=11, employee_id="E9", date="2024-05-03", in_time="08:15", out_time=None),
            AttendanceRecord(id=12, employee_id="E2", date="2024-05-02", in_time="10:00:00", out_time="12:45:00"),
        ]

    def _fail(self) -> None:
        if self.fail_loads:
            raise ServerError(
                code="SERVER_ERROR",
                message="database unavailable",
                details=None,
                trace_id="trace-500",
                status_code=500,
            )

    def list_users(self) -> list[UserSummary]:
        self._fail()
        return list(self.users)

    def list_employees(self) -> list[Employee]:
        return [Employee(**user.model_dump()) for user in self.users]

    def list_attendance(self, *, employee_id: str | None = None) -> list[AttendanceRecord]:
        self.calls.append(("list_attendance", employee_id))
        if employee_id:
            return [record for record in self.attendance if record.employee_id == employee_id]
        return list(self.attendance)

    def update_attendance(self, record_id, payload) -> dict:
        self.calls.append(("update_attendance", (record_id, payload)))
        return {"ok": True}

    def delete_attendance(self, record_id) -> None:
        self.calls.append(("delete_attendance", record_id))
        self._fail()

    def list_work_entries(self, *, user_id=None, assigned_to=None) -> list[WorkEntry]:
        self.calls.append(("list_work_entries", (user_id, assigned_to)))
        return [
            WorkEntry(id=1, work_date="2024-05-01", project_name="Apollo", hours_elapsed="2.5", is_done=True, assigned_by=1, assigned_to=2),
            WorkEntry(
                id=2,
                work_date="2024-05-03",
                project_name="Apollo",
                hours_elapsed=3,
                issues=[{"issue": "Flaky CI", "severity": "High"}],
                assigned_by=1,
                assigned_to=7,
            ),
            WorkEntry(id=3, work_date="2024-05-02", project_name="Hermes", hours_elapsed=None, assigned_by=2, assigned_to=2),
        ]

    def update_work_entry(self, entry_id, payload) -> dict:
        self.calls.append(("update_work_entry", (entry_id, payload)))
        return {"ok": True}

    def list_projects(self) -> list[Project]:
        return [
            Project(
                id=11,
                project_name="Apollo",
                total_estimate_hrs=40,
                assigned_ids=[1, 2],
                created_by=1,
                project_subparts=[{"project_subpart_name": "API", "dead_line": "2024-06-01", "hours_elapsed": 4}],
            ),
            Project(id=12, project_name="Hermes", assigned_ids=[2], created_by=2, is_completed=True),
        ]

    def update_project(self, project_id, payload) -> dict:
        self.calls.append(("update_project", (project_id, payload)))
        return {"ok": True}

    def delete_project(self, project_id) -> None:
        self.calls.append(("delete_project", project_id))


@pytest.fixture()
def client() -> FakeAdminClient:
    return FakeAdminClient()


def test_working_hours() -> None:
    assert working_hours("09:00:00", "17:30:00") == "8.50"
    assert working_hours("2024-05-01T08:00:00", "2024-05-01T08:20:00") == "0.33"
    assert working_hours("09:00", None) == ""
    assert working_hours("late", "17:00") == ""


def test_employees_exclude_current_user(client) -> None:
    screen = EmployeesScreen(client=client, user_role="Admin", current_employee_id="E1")
    assert screen.load()
    assert [row["employee_id"] for row in screen.table.processed_rows] == ["E2"]
    view = screen.render()
    assert view["table"]["actions"] == {"edit": False, "delete": False, "view": False}
    assert view["table"]["filters"][3]["type"] == "multi-select"


def test_attendance_rows_for_privileged_roles(client) -> None:
    screen = AttendanceScreen(client=client, user_role="Attendance Team")
    assert screen.load()

    rows = screen.table.processed_rows
    assert [row["title"] for row in rows] == ["E9-2024-05-03", "E2-2024-05-02", "E1-2024-05-01"]
    assert rows[0]["employee_name"] == "Unknown (E9)"
    assert rows[0]["working_hours"] == ""
    assert rows[1]["working_hours"] == "2.75"
    assert rows[2]["employee_name"] == "Ana Ruiz"
    assert client.calls[0] == ("list_attendance", None)
    assert screen.shell.actions.can_edit
    assert not screen.shell.actions.can_delete


def test_attendance_is_scoped_for_employees(client) -> None:
    screen = AttendanceScreen(client=client, user_role="Employee", employee_id="E2")
    screen.load()
    assert client.calls[0] == ("list_attendance", "E2")
    assert [row["id"] for row in screen.table.processed_rows] == [12]
    assert not screen.shell.actions.can_edit


def test_attendance_edit_flow(client) -> None:
    screen = AttendanceScreen(client=client, user_role="Admin")
    screen.load()

    assert screen.shell.click(1, "edit")
    assert screen.modal == "edit"
    assert screen.selected_row is not None and screen.selected_row["id"] == 12

    assert screen.save_edit({"out_time": "13:00:00"})
    assert ("update_attendance", (12, {"out_time": "13:00:00"})) in client.calls
    assert screen.modal is None
    assert screen.notifications.latest is not None and screen.notifications.latest.level == "success"


def test_attendance_delete_failure_is_reported(client) -> None:
    screen = AttendanceScreen(client=client, user_role="Super Admin")
    screen.load()
    screen.shell.click(0, "delete")
    client.fail_loads = True

    assert screen.confirm_delete() is False
    assert screen.error_message == "database unavailable"
    assert screen.trace_id == "trace-500"
    assert screen.modal == "delete"
    assert screen.notifications.latest is not None and screen.notifications.latest.level == "error"


def test_load_failure_keeps_table_usable(client) -> None:
    client.fail_loads = True
    screen = AttendanceScreen(client=client, user_role="Admin")

    assert screen.load() is False
    view = screen.render()
    assert view["error"] == "database unavailable"
    assert view["table"]["footer"]["label"] == "Page 1 of 1"
    assert view["notifications"]["count"] == 1
    assert view["notifications"]["errors"] == 1


def test_attendance_export(client, tmp_path) -> None:
    screen = AttendanceScreen(client=client, user_role="Admin", export_dir=tmp_path)
    screen.load()
    screen.table.set_search("ana")
    path = screen.export()
    lines = path.read_text(encoding="utf-8").splitlines()
    assert path.name == "Attendance.csv"
    assert lines[0] == '"Title","Date","Employee Name","Start Time","End Time","Work Hours"'
    assert len(lines) == 2


def test_work_entries_annotate_and_sort(client) -> None:
    screen = WorkEntriesScreen(client=client, user_role="Admin")
    screen.load()

    rows = screen.table.processed_rows
    assert client.calls[0] == ("list_work_entries", (None, None))
    assert [row["id"] for row in rows] == [2, 3, 1]
    assert rows[0]["assigned_to_name"] == "Unknown (7)"
    assert rows[2]["assigned_by_name"] == "Ana Ruiz"


def test_work_entries_scope_to_user_for_other_roles(client) -> None:
    screen = WorkEntriesScreen(client=client, user_role="Manager", user_id=2)
    screen.load()
    assert client.calls[0] == ("list_work_entries", (2, 2))
    assert screen.shell.actions.can_edit
    assert not screen.shell.actions.can_delete


def test_work_entries_done_filter_and_cells(client) -> None:
    screen = WorkEntriesScreen(client=client, user_role="Admin")
    screen.load()

    body = screen.render()["table"]["body"]
    first_cells = {cell["accessor"]: cell["display"] for cell in body[0]["cells"]}
    last_cells = {cell["accessor"]: cell["display"] for cell in body[2]["cells"]}
    assert first_cells["is_done"] == "Not Done"
    assert first_cells["issues"] == ["High: Flaky CI"]
    assert last_cells["is_done"] == "Done"
    assert last_cells["issues"] == "None"

    screen.table.set_column_filter("is_done", {"Done"})
    assert [row["id"] for row in screen.table.processed_rows] == [1]
    screen.table.set_column_filter("is_done", set())
    assert len(screen.table.processed_rows) == 3


def test_work_entry_stats() -> None:
    rows = [
        {"hours_elapsed": "2.5", "is_done": True},
        {"hours_elapsed": 3, "is_done": False},
        {"hours_elapsed": None, "is_done": False},
    ]
    assert work_entry_stats(rows) == {
        "total_entries": 3,
        "total_hours": "5.50",
        "average_hours": "1.83",
        "done": 1,
        "pending": 2,
        "tone": "red",
    }
    assert work_entry_stats([])["tone"] == "green"
    assert work_entry_stats([{"is_done": True}, {"is_done": False}])["tone"] == "yellow"


def test_work_entry_stats_follow_table_filters(client) -> None:
    screen = WorkEntriesScreen(client=client, user_role="Admin")
    screen.load()
    screen.table.set_search("hermes")
    assert screen.render()["stats"]["total_entries"] == 1


def test_projects_split_active_and_archived(client) -> None:
    active = ProjectsScreen(client=client, user_role="Admin")
    archived = ArchivedProjectsScreen(client=client, user_role="Admin")
    active.load()
    archived.load()

    assert [row["project_name"] for row in active.table.processed_rows] == ["Apollo"]
    assert [row["project_name"] for row in archived.table.processed_rows] == ["Hermes"]
    assert active.table.processed_rows[0]["assigned_names"] == ["Ana Ruiz", "Sam Admington"]
    assert archived.render()["table"]["title"] == "Archived Projects"


def test_project_cells_render_by_kind(client) -> None:
    screen = ProjectsScreen(client=client, user_role="Manager")
    screen.load()
    cells = {cell["accessor"]: cell for cell in screen.render()["table"]["body"][0]["cells"]}

    assert cells["assigned_names"]["kind"] == "sequence"
    assert cells["project_subparts"]["kind"] == "records"
    assert cells["project_subparts"]["display"][0]["project_subpart_name"] == "API"
    assert cells["updated_at"]["display"] == "N/A"
    assert screen.render()["table"]["actions"] == {"edit": False, "delete": False, "view": True}


def test_project_view_and_delete(client) -> None:
    screen = ProjectsScreen(client=client, user_role="Admin")
    screen.load()

    assert screen.shell.click(0, "row")
    detail = screen.detail()
    assert detail is not None
    assert detail["created_by"] == "Ana Ruiz"
    assert detail["elapsed_hours"] == "-"
    assert detail["subparts"] == [{"name": "API", "deadline": "2024-06-01", "hours_elapsed": 4.0, "status": "In Progress"}]

    assert screen.shell.click(0, "delete")
    assert screen.detail() is None
    assert screen.confirm_delete()
    assert ("delete_project", 11) in client.calls


def test_project_detail_without_assignees() -> None:
    detail = project_detail({"project_name": "Solo", "assigned_names": [], "project_subparts": []})
    assert detail["assigned"] == "No employees assigned."
    assert detail["subparts"] == []
    assert detail["created_at"] == "-"


def test_screens_pick_up_config(client, tmp_path) -> None:
    cfg = AdminConfig(env_name="test", api_base_url="https://api.example.com", page_size=2, export_dir=str(tmp_path))
    screen = AttendanceScreen.from_config(cfg, client, user_role="Admin")
    screen.load()
    assert screen.table.total_pages == 2
    assert screen.export().parent == tmp_path


def test_load_failure_toast_marks_retryable(client) -> None:
    client.fail_loads = True
    screen = AttendanceScreen(client=client, user_role="Admin")
    screen.load()
    assert screen.notifications.latest.details == {"retryable": True}


def test_from_config_wires_telemetry(client, tmp_path) -> None:
    cfg = AdminConfig(
        env_name="test",
        api_base_url="https://api.example.com",
        telemetry_enabled=True,
        telemetry_file=str(tmp_path / "events.jsonl"),
    )
    screen = ProjectsScreen.from_config(cfg, client, user_role="Admin")
    screen.load()
    events = list(screen.telemetry.events())
    assert [event["action"] for event in events] == ["load"]
    assert events[0]["row_count"] == 1
