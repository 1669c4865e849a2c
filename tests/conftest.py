from __future__ import annotations

import pytest

from workforce_admin.table import ColumnDef, FilterType


@pytest.fixture()
def people_columns() -> list[ColumnDef]:
    return [
        ColumnDef(accessor="full_name", header="Full Name"),
        ColumnDef(accessor="role", header="Role", filter_type=FilterType.MULTI_SELECT, options=("Admin", "Employee")),
        ColumnDef(accessor="hours", header="Hours"),
    ]


@pytest.fixture()
def people() -> list[dict]:
    return [
        {"id": 1, "full_name": "Ana Ruiz", "role": "Admin", "hours": "12"},
        {"id": 2, "full_name": "Sam Admington", "role": "Employee", "hours": "7"},
        {"id": 3, "full_name": "Lee Park", "role": "Employee", "hours": None},
        {"id": 4, "full_name": "Kim Soto", "role": "Employee", "hours": "7"},
    ]
