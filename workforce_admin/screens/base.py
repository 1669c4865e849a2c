from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar

from workforce_admin.client import AdminClient
from workforce_admin.config import AdminConfig
from workforce_admin.exceptions import ApiError
from workforce_admin.logger import get_logger, log_action
from workforce_admin.table import DEFAULT_PAGE_SIZE, ColumnDef, DataTable, Page, RowActions, TableShell
from workforce_admin.telemetry import EventCategory, TelemetryLogger, build_event

from .notifications import NotificationCenter

logger = get_logger(__name__)


def name_lookup(users: Iterable[Any], key: str = "id") -> dict[str, str]:
    names: dict[str, str] = {}
    for user in users:
        identity = getattr(user, key, None)
        if identity is None:
            continue
        names[str(identity)] = user.full_name or str(identity)
    return names


def resolve_name(names: dict[str, str], identity: Any) -> str:
    return names.get(str(identity)) or f"Unknown ({identity})"


@dataclass
class TableScreen:
    """List screen controller: fetch rows, hand them to a table, run row actions.

    Subclasses provide ``module``, ``title``, ``columns()`` and ``fetch_rows()``
    and may override the action hooks. Network failures are caught here and
    surfaced as notifications; the table itself never sees them.
    """

    client: AdminClient | None = None
    user_role: str | None = None
    page_size: int = DEFAULT_PAGE_SIZE
    export_dir: str | Path = "exports"
    notifications: NotificationCenter = field(default_factory=NotificationCenter)
    telemetry: TelemetryLogger = field(default_factory=lambda: TelemetryLogger(app_name="workforce_admin", enabled=False))
    is_loading: bool = False
    error_message: str | None = None
    trace_id: str | None = None
    selected_row: dict[str, Any] | None = None
    modal: str | None = None

    module: ClassVar[str] = "table"
    title: ClassVar[str] = "Records"
    edit_roles: ClassVar[frozenset[str]] = frozenset()
    delete_roles: ClassVar[frozenset[str]] = frozenset()

    @classmethod
    def from_config(cls, config: AdminConfig, client: AdminClient | None = None, **kwargs: Any) -> "TableScreen":
        kwargs.setdefault(
            "telemetry",
            TelemetryLogger(app_name="workforce_admin", enabled=config.telemetry_enabled, log_file=config.telemetry_file),
        )
        return cls(client=client, page_size=config.page_size, export_dir=config.export_dir, **kwargs)

    def __post_init__(self) -> None:
        self.table = DataTable([], self.columns(), page_size=self.page_size, title=self.title)
        self.shell = TableShell(
            table=self.table,
            actions=RowActions(
                user_role=self.user_role,
                edit_roles=self.edit_roles,
                delete_roles=self.delete_roles,
                on_edit=self.edit_handler(),
                on_delete=self.delete_handler(),
                on_view=self.view_handler(),
            ),
            export_dir=self.export_dir,
        )

    def columns(self) -> Sequence[ColumnDef]:
        raise NotImplementedError

    def fetch_rows(self) -> list[dict[str, Any]]:
        raise NotImplementedError

    def edit_handler(self) -> Callable[[Any, int], Any] | None:
        return None

    def delete_handler(self) -> Callable[[Any, int], Any] | None:
        return None

    def view_handler(self) -> Callable[[Any], Any] | None:
        return None

    def load(self) -> bool:
        self.is_loading = True
        self.error_message = None
        try:
            rows = self.fetch_rows()
        except ApiError as exc:
            self.error_message = exc.message
            self.trace_id = exc.trace_id
            self.notifications.toast(
                level="error",
                message=f"Could not load {self.title.lower()}",
                trace_id=exc.trace_id,
                details={"retryable": exc.retryable},
            )
            self._emit(EventCategory.API_CALL_RESULT, "load", success=False, error_code=exc.code)
            log_action(logger, self.module, "load", self.user_role, "error", trace_id=exc.trace_id)
            return False
        finally:
            self.is_loading = False
        self.table.set_rows(rows)
        self._emit(EventCategory.NAVIGATION, "load", success=True, row_count=len(rows))
        return True

    def refresh(self) -> bool:
        return self.load()

    def run_mutation(self, action: str, call: Callable[[], Any], *, success_message: str) -> bool:
        try:
            call()
        except ApiError as exc:
            self.error_message = exc.message
            self.trace_id = exc.trace_id
            self.notifications.toast(level="error", message=f"{action.capitalize()} failed", trace_id=exc.trace_id)
            self._emit(EventCategory.ROW_ACTION, action, success=False, error_code=exc.code)
            log_action(logger, self.module, action, self.user_role, "error", trace_id=exc.trace_id)
            return False
        self.notifications.toast(level="success", message=success_message)
        self._emit(EventCategory.ROW_ACTION, action, success=True)
        log_action(logger, self.module, action, self.user_role, "success")
        self.close_modal()
        self.refresh()
        return True

    def search(self, term: str) -> Page:
        page = self.table.set_search(term)
        self._emit(EventCategory.TABLE, "search", row_count=page.total)
        return page

    def filter_by(self, accessor: str, value: Any) -> Page:
        page = self.table.set_column_filter(accessor, value)
        self._emit(EventCategory.TABLE, "filter", row_count=page.total, context={"accessor": accessor})
        return page

    def sort_by(self, accessor: str) -> Page:
        page = self.table.toggle_sort(accessor)
        self._emit(
            EventCategory.TABLE,
            "sort",
            row_count=page.total,
            context={"accessor": accessor, "direction": self.table.sort.direction.value},
        )
        return page

    def open_modal(self, name: str, row: Any) -> None:
        self.modal = name
        self.selected_row = dict(row)

    def close_modal(self) -> None:
        self.modal = None
        self.selected_row = None

    def export(self, output_dir: str | Path | None = None) -> Path:
        path = self.shell.download_csv(output_dir)
        self._emit(EventCategory.EXPORT, "export", success=True, row_count=len(self.table.processed_rows))
        log_action(logger, self.module, "export", self.user_role, "success", file=path.name)
        return path

    def render(self) -> dict[str, Any]:
        return {
            "module": self.module,
            "loading": self.is_loading,
            "error": self.error_message,
            "trace_id": self.trace_id,
            "modal": self.modal,
            "selected": self.selected_row,
            "table": self.shell.render(),
            "notifications": self.notifications.render(),
        }

    def _emit(self, category: EventCategory, action: str, **kwargs: Any) -> None:
        self.telemetry.emit(
            build_event(category, self.module, action, actor_role=self.user_role, trace_id=self.trace_id, **kwargs)
        )
