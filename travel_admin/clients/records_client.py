from __future__ import annotations

from typing import Any

from travel_admin.app.domain.models.record import Record, to_records
from travel_admin.clients.http_client import HttpClient

_LISTING_KEYS = ("items", "rows", "data")


class RecordsClient:
    def __init__(self, http_client: HttpClient, resource_path: str) -> None:
        self.http_client = http_client
        self.resource_path = "/" + resource_path.strip("/")

    async def list_records(self, access_token: str | None) -> tuple[Record, ...]:
        payload = await self.http_client.request("GET", self.resource_path, token=access_token)
        return to_records(normalize_listing(payload))

    async def delete_record(self, access_token: str | None, record_id: str) -> None:
        await self.http_client.request("DELETE", f"{self.resource_path}/{record_id}", token=access_token)


def normalize_listing(payload: Any) -> list[dict[str, Any]]:
    if payload is None:
        return []
    if isinstance(payload, list):
        rows = payload
    elif isinstance(payload, dict):
        rows = next((payload[key] for key in _LISTING_KEYS if isinstance(payload.get(key), list)), [])
    else:
        raise TypeError(f"unexpected listing payload: {type(payload).__name__}")
    return [row for row in rows if isinstance(row, dict)]
