import json
import logging
import os
from datetime import datetime, timezone
from typing import Any

LOG_FORMAT = "%(message)s"


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    """Logger with one plain stream handler; ``WORKFORCE_LOG_LEVEL`` sets the default level."""
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    resolved = (level or os.getenv("WORKFORCE_LOG_LEVEL") or "INFO").upper()
    try:
        logger.setLevel(resolved)
    except ValueError:
        logger.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    actor_role: str | None,
    outcome: str,
    trace_id: str | None = None,
    **context: Any,
) -> None:
    record = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "level": "ERROR" if outcome == "error" else "INFO",
        "module": module,
        "action": action,
        "actor_role": actor_role,
        "trace_id": trace_id,
        "outcome": outcome,
    }
    if context:
        record["context"] = context
    logger.log(logging.ERROR if outcome == "error" else logging.INFO, json.dumps(record, default=str))
