from __future__ import annotations

import asyncio
from typing import Any

import httpx

from travel_admin.app.config import AppConfig
from travel_admin.app.infrastructure.logging.logger import get_logger, log_action
from travel_admin.clients.errors import ApiError

logger = get_logger("travel_admin.http")


class HttpClient:
    """Async JSON client for the data store. Only GET requests are retried."""

    def __init__(
        self,
        config: AppConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or AppConfig.from_env()
        self._client = client or httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            verify=self.config.verify_ssl,
        )
        self._retry_max_attempts = max(1, self.config.retry_max_attempts)
        self._retry_backoff_ms = max(0, self.config.retry_backoff_ms)

    async def request(
        self,
        method: str,
        path: str,
        token: str | None = None,
        json_body: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        headers: dict[str, str] = {}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        normalized_path = path if path.startswith("/") else f"/{path}"
        allow_retry = method.upper() == "GET"

        for attempt in range(1, self._retry_max_attempts + 1):
            try:
                response = await self._client.request(
                    method,
                    normalized_path,
                    json=json_body,
                    headers=headers,
                    params=params,
                )
            except httpx.TimeoutException as exc:
                if (not allow_retry) or attempt >= self._retry_max_attempts:
                    raise ApiError(
                        code="TIMEOUT_ERROR",
                        message="The data store took too long to respond",
                        details=str(exc),
                    ) from exc
                await self._backoff(method, normalized_path, attempt, "timeout")
                continue
            except httpx.TransportError as exc:
                if (not allow_retry) or attempt >= self._retry_max_attempts:
                    raise ApiError(
                        code="NETWORK_ERROR",
                        message="Network error while calling the data store",
                        details=str(exc),
                    ) from exc
                await self._backoff(method, normalized_path, attempt, "transport_error")
                continue

            if response.status_code >= 400:
                error = ApiError.from_http_response(response)
                if allow_retry and error.is_transient and attempt < self._retry_max_attempts:
                    await self._backoff(method, normalized_path, attempt, f"http_{response.status_code}")
                    continue
                raise error

            if not response.content:
                return None
            try:
                return response.json()
            except ValueError:
                return None

        raise ApiError(code="NETWORK_ERROR", message="Network error while calling the data store", details="retry exhausted")

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _backoff(self, method: str, path: str, attempt: int, reason: str) -> None:
        log_action(logger, "http", f"{method.upper()} {path}", "retry", attempt=attempt, reason=reason)
        await asyncio.sleep((self._retry_backoff_ms * attempt) / 1000)
