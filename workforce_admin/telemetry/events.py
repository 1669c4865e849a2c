"""Telemetry event schema for the admin screens.

Events describe what a user did to a screen (loaded it, sorted or filtered
its table, exported it, acted on a row) and how the backend answered. They
never carry personal data: context keys that look like PII are refused.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class EventCategory(str, Enum):
    NAVIGATION = "navigation"
    TABLE = "table"
    EXPORT = "export"
    ROW_ACTION = "row_action"
    API_CALL_RESULT = "api_call_result"
    ERROR = "error"


TELEMETRY_CATEGORIES = frozenset(category.value for category in EventCategory)

PII_CONTEXT_KEYS = frozenset(
    {
        "address",
        "authorization",
        "email",
        "employee_name",
        "full_name",
        "password",
        "phone",
        "token",
    }
)


@dataclass(frozen=True)
class TelemetryEvent:
    category: EventCategory
    module: str
    action: str
    timestamp_utc: str
    actor_role: str | None = None
    trace_id: str | None = None
    success: bool | None = None
    error_code: str | None = None
    row_count: int | None = None
    context: dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return f"{self.module}.{self.action}"

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "category": self.category.value,
            "name": self.name,
            "module": self.module,
            "action": self.action,
            "timestamp_utc": self.timestamp_utc,
        }
        optional = {
            "actor_role": self.actor_role,
            "trace_id": self.trace_id,
            "success": self.success,
            "error_code": self.error_code,
            "row_count": self.row_count,
        }
        payload.update({key: value for key, value in optional.items() if value is not None})
        if self.context:
            payload["context"] = dict(self.context)
        return payload


def pii_keys(context: dict[str, Any] | None) -> list[str]:
    return sorted(key for key in context or {} if key.lower() in PII_CONTEXT_KEYS)


def build_event(
    category: EventCategory | str,
    module: str,
    action: str,
    *,
    actor_role: str | None = None,
    trace_id: str | None = None,
    success: bool | None = None,
    error_code: str | None = None,
    row_count: int | None = None,
    context: dict[str, Any] | None = None,
    now: datetime | None = None,
) -> TelemetryEvent:
    try:
        resolved = EventCategory(category)
    except ValueError as exc:
        raise ValueError(f"Unsupported telemetry category: {category}") from exc
    blocked = pii_keys(context)
    if blocked:
        raise ValueError(f"PII-like keys are forbidden in telemetry context: {blocked}")
    return TelemetryEvent(
        category=resolved,
        module=module,
        action=action,
        timestamp_utc=(now or datetime.now(timezone.utc)).isoformat(),
        actor_role=actor_role,
        trace_id=trace_id,
        success=success,
        error_code=error_code,
        row_count=row_count,
        context=dict(context or {}),
    )
