from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class AdminConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 15.0
    retries: int = 2
    retry_backoff_seconds: float = 0.3
    verify_ssl: bool = True
    page_size: int = 10
    export_dir: str = "exports"
    telemetry_enabled: bool = False
    telemetry_file: str | None = None

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def load_config(env_file: str | None = None) -> AdminConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = (os.getenv("WORKFORCE_ENV") or "dev").strip()
    env_key = env_name.upper()
    api_base_url = (
        (os.getenv(f"WORKFORCE_API_BASE_URL_{env_key}") or "").strip()
        or (os.getenv("WORKFORCE_API_BASE_URL") or "").strip()
    )

    connect_timeout = _read_float("WORKFORCE_CONNECT_TIMEOUT_SECONDS", "5")
    read_timeout = _read_float("WORKFORCE_READ_TIMEOUT_SECONDS", "15")
    retries = _read_int("WORKFORCE_RETRIES", "2")
    backoff = _read_float("WORKFORCE_RETRY_BACKOFF_SECONDS", "0.3")
    page_size = _read_int("WORKFORCE_PAGE_SIZE", "10")
    export_dir = (os.getenv("WORKFORCE_EXPORT_DIR") or "exports").strip()

    _validate(connect_timeout > 0, "WORKFORCE_CONNECT_TIMEOUT_SECONDS must be greater than 0")
    _validate(read_timeout > 0, "WORKFORCE_READ_TIMEOUT_SECONDS must be greater than 0")
    _validate(retries >= 0, "WORKFORCE_RETRIES must be >= 0")
    _validate(backoff >= 0, "WORKFORCE_RETRY_BACKOFF_SECONDS must be >= 0")
    _validate(page_size >= 1, "WORKFORCE_PAGE_SIZE must be >= 1")
    _validate(bool(export_dir), "WORKFORCE_EXPORT_DIR cannot be empty")

    return AdminConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        connect_timeout_seconds=connect_timeout,
        read_timeout_seconds=read_timeout,
        retries=retries,
        retry_backoff_seconds=backoff,
        verify_ssl=_coerce_bool(os.getenv("WORKFORCE_VERIFY_SSL"), True),
        page_size=page_size,
        export_dir=export_dir,
        telemetry_enabled=_coerce_bool(os.getenv("WORKFORCE_TELEMETRY_ENABLED"), False),
        telemetry_file=os.getenv("WORKFORCE_TELEMETRY_FILE") or None,
    )


def require_api_base_url(config: AdminConfig) -> str:
    if not config.api_base_url:
        raise ConfigError(
            "Missing required configuration WORKFORCE_API_BASE_URL (or WORKFORCE_API_BASE_URL_<ENV>)."
        )
    return config.api_base_url
