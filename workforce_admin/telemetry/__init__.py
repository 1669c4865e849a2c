from .events import TELEMETRY_CATEGORIES, EventCategory, TelemetryEvent, build_event
from .logger import TelemetryLogger, telemetry_enabled_from_env

__all__ = [
    "EventCategory",
    "TELEMETRY_CATEGORIES",
    "TelemetryEvent",
    "TelemetryLogger",
    "build_event",
    "telemetry_enabled_from_env",
]
