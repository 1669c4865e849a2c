from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterator
from pathlib import Path

from .events import TelemetryEvent

ENABLED_VALUES = frozenset({"1", "true", "yes", "on"})

logger = logging.getLogger(__name__)


def telemetry_enabled_from_env() -> bool:
    return os.getenv("WORKFORCE_TELEMETRY_ENABLED", "0").strip().lower() in ENABLED_VALUES


class TelemetryLogger:
    """Append-only JSONL sink, one file per application.

    With ``echo`` set, every line is also logged at INFO on this module's
    logger.
    """

    def __init__(
        self,
        *,
        app_name: str,
        enabled: bool | None = None,
        log_file: str | Path | None = None,
        echo: bool = False,
    ) -> None:
        self.app_name = app_name
        self.enabled = telemetry_enabled_from_env() if enabled is None else enabled
        self.log_file = Path(log_file) if log_file else Path("artifacts") / "telemetry" / f"{app_name}.jsonl"
        self.echo = echo

    def emit(self, event: TelemetryEvent) -> bool:
        if not self.enabled:
            return False
        line = json.dumps({**event.to_dict(), "app_name": self.app_name}, sort_keys=True, default=str)
        self.log_file.parent.mkdir(parents=True, exist_ok=True)
        with self.log_file.open("a", encoding="utf-8") as fp:
            fp.write(line + "\n")
        if self.echo:
            logger.info(line)
        return True

    def events(self) -> Iterator[dict]:
        if not self.log_file.exists():
            return
        with self.log_file.open(encoding="utf-8") as fp:
            for line in fp:
                if line.strip():
                    yield json.loads(line)
