from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

RecordId = int | str


def _flag(value: Any) -> Any:
    return False if value is None else value


def _text_id(value: Any) -> Any:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


# the backend sends null for unset flags and numeric employee ids on older rows
Flag = Annotated[bool, BeforeValidator(_flag)]
EmployeeCode = Annotated[str | None, BeforeValidator(_text_id)]


class UserSummary(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: RecordId
    employee_id: EmployeeCode = None
    full_name: str | None = None
    email: str | None = None
    role: str | None = None


class Employee(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: RecordId | None = None
    employee_id: EmployeeCode = None
    full_name: str | None = None
    email: str | None = None
    role: str | None = None


class AttendanceRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: RecordId | None = None
    employee_id: EmployeeCode = None
    date: str | None = None
    in_time: str | None = None
    out_time: str | None = None


class WorkIssue(BaseModel):
    model_config = ConfigDict(extra="allow")

    issue: str = ""
    severity: str = "Medium"


class WorkEntry(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: RecordId | None = None
    work_date: str | None = None
    project_name: str | None = None
    project_subpart: str | None = None
    hours_elapsed: float | str | None = None
    is_done: Flag = False
    issues: list[WorkIssue] = Field(default_factory=list)
    assigned_by: RecordId | None = None
    assigned_to: RecordId | None = None


class ProjectSubpart(BaseModel):
    model_config = ConfigDict(extra="allow")

    project_subpart_name: str | None = None
    dead_line: str | None = None
    hours_elapsed: float | None = None
    is_done: Flag = False


class Project(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: RecordId | None = None
    project_name: str | None = None
    total_estimate_hrs: float | str | None = None
    total_elapsed_hrs: float | str | None = None
    assigned_ids: list[RecordId] = Field(default_factory=list)
    created_by: RecordId | None = None
    project_subparts: list[ProjectSubpart] = Field(default_factory=list)
    is_completed: Flag = False
    created_at: str | None = None
    updated_at: str | None = None
