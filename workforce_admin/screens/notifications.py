from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

LEVELS = ("info", "success", "warning", "error")


@dataclass(frozen=True)
class Toast:
    level: str
    message: str
    trace_id: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class NotificationCenter:
    """Pending toasts for one screen, newest last."""

    items: list[Toast] = field(default_factory=list)

    def toast(
        self,
        *,
        level: str,
        message: str,
        trace_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> Toast:
        if level not in LEVELS:
            raise ValueError(f"Unknown notification level {level!r}")
        item = Toast(level=level, message=message, trace_id=trace_id, details=dict(details or {}))
        self.items.append(item)
        return item

    @property
    def latest(self) -> Toast | None:
        return self.items[-1] if self.items else None

    def dismiss(self, position: int) -> None:
        if 0 <= position < len(self.items):
            del self.items[position]

    def render(self) -> dict[str, Any]:
        return {
            "count": len(self.items),
            "errors": sum(1 for item in self.items if item.level == "error"),
            "messages": [asdict(item) for item in self.items],
        }

    def clear(self) -> None:
        self.items.clear()
