from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

RowCallback = Callable[[Any, int], Any]
ViewCallback = Callable[[Any], Any]

logger = logging.getLogger(__name__)


class ClickTarget(str, Enum):
    ROW = "row"
    EDIT = "edit"
    DELETE = "delete"


@dataclass(frozen=True)
class ActionGate:
    key: str
    allowed: bool
    reason: str | None = None


def gate_action(
    key: str,
    callback: Callable[..., Any] | None,
    user_role: str | None,
    allowed_roles: frozenset[str],
) -> ActionGate:
    if callback is None:
        return ActionGate(key=key, allowed=False, reason=f"No {key} handler supplied.")
    if user_role is None or user_role not in allowed_roles:
        return ActionGate(key=key, allowed=False, reason=f"Role {user_role!r} may not {key} rows.")
    return ActionGate(key=key, allowed=True)


@dataclass
class RowActions:
    user_role: str | None = None
    edit_roles: Iterable[str] = ()
    delete_roles: Iterable[str] = ()
    on_edit: RowCallback | None = None
    on_delete: RowCallback | None = None
    on_view: ViewCallback | None = None
    _edit_roles: frozenset[str] = field(init=False, repr=False)
    _delete_roles: frozenset[str] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._edit_roles = frozenset(self.edit_roles or ())
        self._delete_roles = frozenset(self.delete_roles or ())

    @property
    def edit_gate(self) -> ActionGate:
        return gate_action("edit", self.on_edit, self.user_role, self._edit_roles)

    @property
    def delete_gate(self) -> ActionGate:
        return gate_action("delete", self.on_delete, self.user_role, self._delete_roles)

    @property
    def can_edit(self) -> bool:
        return self.edit_gate.allowed

    @property
    def can_delete(self) -> bool:
        return self.delete_gate.allowed

    @property
    def can_view(self) -> bool:
        return self.on_view is not None

    def dispatch(self, target: ClickTarget | str, row: Any, index: int) -> bool:
        """Invoke the handler for one click; returns whether anything fired.

        Clicks on the Edit/Delete controls never bubble up to the row's view
        handler.
        """
        try:
            resolved = ClickTarget(target)
        except ValueError:
            logger.warning("row_click_unknown_target", extra={"target": str(target)})
            return False
        if resolved is ClickTarget.EDIT:
            if not self.can_edit or self.on_edit is None:
                return False
            self.on_edit(row, index)
            return True
        if resolved is ClickTarget.DELETE:
            if not self.can_delete or self.on_delete is None:
                return False
            self.on_delete(row, index)
            return True
        if self.on_view is None:
            return False
        self.on_view(row)
        return True


__all__ = ["ActionGate", "ClickTarget", "RowActions", "RowCallback", "ViewCallback", "gate_action"]
