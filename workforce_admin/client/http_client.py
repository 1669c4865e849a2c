from __future__ import annotations

import json
import logging
import time
import uuid
from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import urljoin

import requests

from workforce_admin.config import AdminConfig, require_api_base_url
from workforce_admin.exceptions import ResponseFormatError, TransportError

from .error_mapper import map_error

logger = logging.getLogger(__name__)

TRACE_HEADER = "X-Trace-ID"
TRACE_HEADER_ALIASES = (TRACE_HEADER, "X-Trace-Id", "x-trace-id")
RETRYABLE_METHODS = frozenset({"GET", "HEAD"})

Payload = dict[str, Any] | list[Any] | None


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str
    trace_id: str | None


@dataclass
class HttpClient:
    """JSON-over-HTTP transport for the workforce API.

    Every call carries a trace id. Reads are retried on transport failures and
    5xx answers with exponential backoff; writes go out exactly once.
    """

    config: AdminConfig
    session: requests.Session | None = None
    trace_id: str | None = None
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()

    def url_for(self, path: str) -> str:
        return urljoin(require_api_base_url(self.config).rstrip("/") + "/", path.lstrip("/"))

    def ensure_trace_id(self) -> str:
        if not self.trace_id:
            self.trace_id = str(uuid.uuid4())
        return self.trace_id

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
        module: str = "unknown",
        operation: str = "unknown",
    ) -> Payload:
        verb = method.upper()
        url = self.url_for(path)
        outgoing = {"Accept": "application/json", **(headers or {}), TRACE_HEADER: self.ensure_trace_id()}
        started = time.monotonic()
        try:
            response = self._send(verb, url, outgoing, json_body, params, operation)
        except TransportError:
            self._record(module, operation, started, "error")
            raise

        self._adopt_trace(response.headers)
        if not response.ok:
            self._record(module, operation, started, "error")
            raise map_error(response.status_code, self._error_payload(response), self.trace_id)

        if not response.content:
            self._record(module, operation, started, "success")
            return None
        try:
            body = response.json()
        except requests.JSONDecodeError as exc:
            self._record(module, operation, started, "error")
            raise ResponseFormatError(
                code="INVALID_RESPONSE",
                message=f"{operation} returned a non-JSON body",
                details={"content_type": response.headers.get("Content-Type")},
                trace_id=self.trace_id,
                status_code=response.status_code,
            ) from exc
        self._record(module, operation, started, "success")
        return body

    def _send(
        self,
        verb: str,
        url: str,
        headers: dict[str, str],
        json_body: dict[str, Any] | None,
        params: dict[str, Any] | None,
        operation: str,
    ) -> requests.Response:
        if self.session is None:
            raise RuntimeError("HTTP session not initialized")
        attempts = self.config.retries + 1 if verb in RETRYABLE_METHODS else 1
        for attempt in range(1, attempts + 1):
            final = attempt == attempts
            try:
                response = self.session.request(
                    method=verb,
                    url=url,
                    headers=headers,
                    json=json_body,
                    params=params,
                    timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as exc:
                if final:
                    raise TransportError(
                        code="TRANSPORT_ERROR",
                        message=str(exc),
                        details={"type": type(exc).__name__},
                        trace_id=self.trace_id,
                        status_code=0,
                    ) from exc
                logger.warning("http_retry", extra={"operation": operation, "attempt": attempt, "error": type(exc).__name__})
            else:
                if final or response.status_code < 500:
                    return response
                logger.warning(
                    "http_retry",
                    extra={"operation": operation, "attempt": attempt, "status_code": response.status_code},
                )
            time.sleep(self.config.retry_backoff_seconds * 2 ** (attempt - 1))
        raise RuntimeError(f"HTTP request {operation} made no attempts")

    @staticmethod
    def _error_payload(response: requests.Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except json.JSONDecodeError:
            return {"message": response.text}
        return payload if isinstance(payload, dict) else {"message": str(payload)}

    def _adopt_trace(self, headers: Mapping[str, str]) -> None:
        trace_id = next((headers.get(key) for key in TRACE_HEADER_ALIASES if headers.get(key)), None)
        if trace_id:
            self.trace_id = trace_id

    def _record(self, module: str, operation: str, started: float, result: str) -> None:
        self.last_operation = LastOperation(
            module=module,
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
            trace_id=self.trace_id,
        )
