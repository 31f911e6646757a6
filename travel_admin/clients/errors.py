from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

TRACE_HEADERS = ("X-Trace-ID", "X-Trace-Id")


@dataclass
class ApiError(Exception):
    """Failure reported by the data store, or raised before a response arrived."""

    code: str
    message: str
    details: dict[str, Any] | list[Any] | str | None = None
    trace_id: str | None = None
    status_code: int | None = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    @property
    def is_transient(self) -> bool:
        if self.status_code is None:
            return self.code in {"NETWORK_ERROR", "TIMEOUT_ERROR"}
        return 500 <= self.status_code <= 599

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404

    @classmethod
    def from_http_response(cls, response: httpx.Response) -> "ApiError":
        header_trace = next((response.headers[name] for name in TRACE_HEADERS if name in response.headers), None)
        fallback_message = response.text or f"HTTP {response.status_code}"
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if not isinstance(payload, dict):
            return cls(
                code="HTTP_ERROR",
                message=fallback_message,
                details=payload,
                trace_id=header_trace,
                status_code=response.status_code,
            )

        # FastAPI style {"detail": ...} bodies carry no code of their own.
        details = payload.get("details", payload.get("detail"))
        return cls(
            code=str(payload.get("code") or "HTTP_ERROR"),
            message=str(payload.get("message") or fallback_message),
            details=details,
            trace_id=payload.get("trace_id") or header_trace,
            status_code=response.status_code,
        )
