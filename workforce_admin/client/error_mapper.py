from __future__ import annotations

from typing import Mapping

from workforce_admin.exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ServerError,
    ValidationError,
)

STATUS_ERRORS: dict[int, type[ApiError]] = {
    400: ValidationError,
    401: AuthError,
    403: PermissionDeniedError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
}


def error_class_for(status_code: int) -> type[ApiError]:
    if status_code >= 500:
        return ServerError
    return STATUS_ERRORS.get(status_code, ApiError)


def map_error(status_code: int, payload: Mapping[str, object] | None, trace_id: str | None) -> ApiError:
    """Build the typed error for a failed response.

    The backend reports failures as ``{"message": ...}`` or FastAPI-style
    ``{"detail": ...}``; a ``trace_id`` in the body replaces the client one.
    """
    body = dict(payload or {})
    server_trace = body.get("trace_id")
    return error_class_for(status_code)(
        code=str(body.get("code") or "HTTP_ERROR"),
        message=str(body.get("message") or body.get("detail") or "Request failed"),
        details=body.get("details"),
        trace_id=str(server_trace) if server_trace is not None else trace_id,
        status_code=status_code,
        raw_payload=body,
    )
