from __future__ import annotations

SUPER_ADMIN = "Super Admin"
ADMIN = "Admin"
MANAGER = "Manager"
ATTENDANCE_TEAM = "Attendance Team"
EMPLOYEE = "Employee"

ALL_ROLES: tuple[str, ...] = (SUPER_ADMIN, ADMIN, MANAGER, ATTENDANCE_TEAM, EMPLOYEE)

ADMIN_ROLES = frozenset({SUPER_ADMIN, ADMIN})
ATTENDANCE_EDIT_ROLES = frozenset({SUPER_ADMIN, ADMIN, ATTENDANCE_TEAM})
ATTENDANCE_DELETE_ROLES = ADMIN_ROLES
ATTENDANCE_VIEW_ALL_ROLES = frozenset({SUPER_ADMIN, ADMIN, ATTENDANCE_TEAM})
WORK_ENTRY_VIEW_ALL_ROLES = ADMIN_ROLES
PROJECT_EDIT_ROLES = ADMIN_ROLES
PROJECT_DELETE_ROLES = ADMIN_ROLES
