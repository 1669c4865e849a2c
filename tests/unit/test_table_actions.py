from __future__ import annotations

import pytest

from workforce_admin.table import ColumnDef, DataTable, RowActions, TableShell, gate_action


def _noop(*_args) -> None:
    return None


@pytest.mark.parametrize(
    ("role", "callback", "allowed"),
    [
        ("Admin", _noop, True),
        ("Employee", _noop, False),
        (None, _noop, False),
        ("Admin", None, False),
    ],
)
def test_gate_requires_role_and_callback(role, callback, allowed) -> None:
    gate = gate_action("edit", callback, role, frozenset({"Admin", "Super Admin"}))
    assert gate.allowed is allowed
    assert (gate.reason is None) is allowed


def test_edit_and_delete_are_gated_independently() -> None:
    actions = RowActions(
        user_role="Attendance Team",
        edit_roles=["Admin", "Attendance Team"],
        delete_roles=["Admin"],
        on_edit=_noop,
        on_delete=_noop,
    )
    assert actions.can_edit
    assert not actions.can_delete


def test_header_only_shows_permitted_action_columns() -> None:
    table = DataTable([{"id": 1, "name": "A"}], [ColumnDef(accessor="name", header="Name")])
    shell = TableShell(
        table=table,
        actions=RowActions(user_role="Admin", edit_roles=["Admin"], delete_roles=["Admin"], on_edit=_noop),
    )
    labels = [cell["label"] for cell in shell.render()["header"]]
    assert labels == ["Name", "Edit"]


def test_action_clicks_never_reach_the_view_handler() -> None:
    calls: list[tuple] = []
    actions = RowActions(
        user_role="Admin",
        edit_roles=["Admin"],
        delete_roles=["Admin"],
        on_edit=lambda row, index: calls.append(("edit", row["id"], index)),
        on_delete=lambda row, index: calls.append(("delete", row["id"], index)),
        on_view=lambda row: calls.append(("view", row["id"])),
    )
    row = {"id": 7}

    assert actions.dispatch("edit", row, 0)
    assert actions.dispatch("delete", row, 0)
    assert actions.dispatch("row", row, 0)
    assert not actions.dispatch("checkbox", row, 0)

    assert calls == [("edit", 7, 0), ("delete", 7, 0), ("view", 7)]


def test_denied_action_does_not_fire() -> None:
    fired: list[int] = []
    actions = RowActions(user_role="Employee", edit_roles=["Admin"], on_edit=lambda row, index: fired.append(index))
    assert not actions.dispatch("edit", {"id": 1}, 0)
    assert fired == []


def test_callbacks_receive_index_across_pages() -> None:
    rows = [{"id": index} for index in range(15)]
    seen: list[tuple[int, int]] = []
    table = DataTable(rows, [ColumnDef(accessor="id", header="ID")], page_size=10)
    shell = TableShell(
        table=table,
        actions=RowActions(user_role="Admin", edit_roles=["Admin"], on_edit=lambda row, index: seen.append((row["id"], index))),
    )
    table.next_page()

    assert shell.click(2, "edit")
    assert not shell.click(9, "edit")
    assert seen == [(12, 12)]
