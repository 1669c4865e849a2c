from __future__ import annotations

from dataclasses import dataclass


class ColumnDefinitionError(ValueError):
    """Raised when a table column schema is malformed."""


class TableConfigError(ValueError):
    """Raised when a table instance is configured with invalid settings."""


@dataclass
class ApiError(Exception):
    """Failed call to the workforce API, as reported to screens."""

    code: str
    message: str
    details: object | None
    trace_id: str | None
    status_code: int
    raw_payload: object | None = None

    @property
    def retryable(self) -> bool:
        return self.status_code == 0 or self.status_code >= 500

    def __str__(self) -> str:
        suffix = f" trace_id={self.trace_id}" if self.trace_id else ""
        return f"[{self.status_code}] {self.code}: {self.message}{suffix}"


class AuthError(ApiError):
    """Missing, expired or rejected bearer token."""


class PermissionDeniedError(ApiError):
    """The backend refused the action for the current role."""


class NotFoundError(ApiError):
    pass


class ValidationError(ApiError):
    pass


class ConflictError(ApiError):
    pass


class ServerError(ApiError):
    pass


class TransportError(ApiError):
    """No HTTP response: connection refused, DNS failure or timeout."""


class ResponseFormatError(ApiError):
    """A successful response whose body could not be read as the expected records."""
