from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, ClassVar

from workforce_admin.table import ColumnDef, FilterType

from .base import TableScreen
from .roles import ALL_ROLES


@dataclass
class EmployeesScreen(TableScreen):
    """Read-only directory of everyone except the signed-in user."""

    current_employee_id: str | None = None

    module: ClassVar[str] = "employees"
    title: ClassVar[str] = "Employees"

    def columns(self) -> Sequence[ColumnDef]:
        return (
            ColumnDef(accessor="employee_id", header="Employee ID"),
            ColumnDef(accessor="full_name", header="Full Name"),
            ColumnDef(accessor="email", header="Email"),
            ColumnDef(accessor="role", header="Role", filter_type=FilterType.MULTI_SELECT, options=ALL_ROLES),
        )

    def fetch_rows(self) -> list[dict[str, Any]]:
        if self.client is None:
            return []
        employees = self.client.list_employees()
        return [
            employee.model_dump()
            for employee in employees
            if self.current_employee_id is None or employee.employee_id != self.current_employee_id
        ]
