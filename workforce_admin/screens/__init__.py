from .attendance import AttendanceScreen, attendance_row, working_hours
from .base import TableScreen, name_lookup, resolve_name
from .employees import EmployeesScreen
from .notifications import NotificationCenter
from .projects import ArchivedProjectsScreen, ProjectsScreen, project_detail, project_row
from .work_entries import WorkEntriesScreen, work_entry_row, work_entry_stats

__all__ = [
    "ArchivedProjectsScreen",
    "AttendanceScreen",
    "EmployeesScreen",
    "NotificationCenter",
    "ProjectsScreen",
    "TableScreen",
    "WorkEntriesScreen",
    "attendance_row",
    "name_lookup",
    "project_detail",
    "project_row",
    "resolve_name",
    "work_entry_stats",
    "work_entry_row",
    "working_hours",
]
