from .admin_client import AdminClient
from .error_mapper import error_class_for, map_error
from .http_client import TRACE_HEADER, HttpClient
from .models import AttendanceRecord, Employee, Project, ProjectSubpart, UserSummary, WorkEntry, WorkIssue

__all__ = [
    "AdminClient",
    "AttendanceRecord",
    "Employee",
    "HttpClient",
    "Project",
    "ProjectSubpart",
    "TRACE_HEADER",
    "UserSummary",
    "WorkEntry",
    "WorkIssue",
    "error_class_for",
    "map_error",
]
