from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

import pydantic

from workforce_admin.exceptions import ResponseFormatError

from .http_client import HttpClient
from .models import AttendanceRecord, Employee, Project, UserSummary, WorkEntry

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def _unwrap(payload: Any, key: str) -> list[Any]:
    if isinstance(payload, dict):
        payload = payload.get(key)
    return list(payload or [])


@dataclass
class AdminClient:
    http: HttpClient
    access_token: str | None = None
    module: str = "admin"

    def _auth_headers(self) -> dict[str, str]:
        if self.access_token:
            return {"Authorization": f"Bearer {self.access_token}"}
        return {}

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        headers = {**self._auth_headers(), **kwargs.pop("headers", {})}
        return self.http.request(method, path, headers=headers, module=self.module, **kwargs)

    def _records(self, model: type[ModelT], payload: Any, key: str, operation: str) -> list[ModelT]:
        try:
            return [model.model_validate(item) for item in _unwrap(payload, key)]
        except pydantic.ValidationError as exc:
            raise ResponseFormatError(
                code="INVALID_RESPONSE",
                message=f"Unexpected {operation} payload",
                details={"errors": exc.errors(include_url=False, include_input=False)},
                trace_id=self.http.trace_id,
                status_code=200,
            ) from exc

    def list_users(self) -> list[UserSummary]:
        payload = self._request("GET", "users/", operation="users.list")
        return self._records(UserSummary, payload, "users", "users.list")

    def list_employees(self) -> list[Employee]:
        payload = self._request("GET", "users/", operation="employees.list")
        return self._records(Employee, payload, "users", "employees.list")

    def list_attendance(self, *, employee_id: str | None = None) -> list[AttendanceRecord]:
        path = f"attendance/employee/{employee_id}" if employee_id else "attendance/all"
        payload = self._request("GET", path, operation="attendance.list")
        return self._records(AttendanceRecord, payload, "attendance", "attendance.list")

    def update_attendance(self, record_id: int | str, payload: dict[str, Any]) -> Any:
        return self._request("PUT", f"attendance/{record_id}", json_body=payload, operation="attendance.update")

    def delete_attendance(self, record_id: int | str) -> Any:
        return self._request("DELETE", f"attendance/delete/{record_id}", operation="attendance.delete")

    def list_work_entries(
        self,
        *,
        user_id: int | str | None = None,
        assigned_to: int | str | None = None,
    ) -> list[WorkEntry]:
        if user_id is None and assigned_to is None:
            payload = self._request("GET", "work-day/all", operation="work_entries.list")
        else:
            params = {"user_id": user_id, "assigned_to": assigned_to}
            payload = self._request(
                "GET",
                "work-day/filter",
                params={key: value for key, value in params.items() if value is not None},
                operation="work_entries.filter",
            )
        return self._records(WorkEntry, payload, "entries", "work_entries.list")

    def update_work_entry(self, entry_id: int | str, payload: dict[str, Any]) -> Any:
        return self._request("PUT", f"work-day/update/{entry_id}", json_body=payload, operation="work_entries.update")

    def list_projects(self) -> list[Project]:
        payload = self._request("GET", "projects/all", operation="projects.list")
        return self._records(Project, payload, "projects", "projects.list")

    def update_project(self, project_id: int | str, payload: dict[str, Any]) -> Any:
        return self._request("PUT", f"projects/update/{project_id}", json_body=payload, operation="projects.update")

    def delete_project(self, project_id: int | str) -> Any:
        return self._request("DELETE", f"projects/delete/{project_id}", operation="projects.delete")
