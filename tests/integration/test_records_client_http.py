import asyncio

import httpx
import pytest

from travel_admin.app.config import AppConfig
from travel_admin.clients.errors import ApiError
from travel_admin.clients.http_client import HttpClient
from travel_admin.clients.records_client import RecordsClient, normalize_listing


class _Handler:
    def __init__(self, responses):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.responses.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


def _client(handler: _Handler, resource_path: str = "bookings") -> RecordsClient:
    config = AppConfig(
        base_url="http://store",
        timeout_seconds=5,
        verify_ssl=True,
        retry_max_attempts=3,
        retry_backoff_ms=0,
    )
    transport = httpx.AsyncClient(base_url=config.base_url, transport=httpx.MockTransport(handler))
    return RecordsClient(HttpClient(config=config, client=transport), resource_path)


def test_list_records_sends_token_and_parses_rows() -> None:
    handler = _Handler([httpx.Response(200, json={"items": [{"id": 1, "name": "Bob", "phone_number": "555"}]})])
    client = _client(handler)

    records = asyncio.run(client.list_records("tkn"))

    assert handler.requests[0].method == "GET"
    assert handler.requests[0].url.path == "/bookings"
    assert handler.requests[0].headers["Authorization"] == "Bearer tkn"
    assert records[0].id == "1"
    assert records[0].get("phone_number") == "555"


def test_list_records_accepts_bare_list() -> None:
    handler = _Handler([httpx.Response(200, json=[{"id": "d1", "name": "Bali"}])])

    records = asyncio.run(_client(handler, "destinations").list_records(None))

    assert [record.id for record in records] == ["d1"]
    assert "Authorization" not in handler.requests[0].headers


def test_delete_record_uses_record_path() -> None:
    handler = _Handler([httpx.Response(204)])

    result = asyncio.run(_client(handler, "users").delete_record("tkn", "u-5"))

    assert result is None
    assert handler.requests[0].method == "DELETE"
    assert handler.requests[0].url.path == "/users/u-5"


def test_get_is_retried_on_5xx_and_transport_errors() -> None:
    handler = _Handler(
        [
            httpx.ConnectError("refused"),
            httpx.Response(503, json={"code": "INTERNAL_ERROR", "message": "down"}),
            httpx.Response(200, json={"rows": []}),
        ]
    )

    records = asyncio.run(_client(handler).list_records("tkn"))

    assert records == ()
    assert len(handler.requests) == 3


def test_delete_is_not_retried() -> None:
    handler = _Handler([httpx.Response(503, json={"code": "INTERNAL_ERROR", "message": "down"})])

    with pytest.raises(ApiError) as captured:
        asyncio.run(_client(handler).delete_record("tkn", "1"))

    assert captured.value.status_code == 503
    assert captured.value.is_transient
    assert len(handler.requests) == 1


def test_error_payload_and_trace_header_are_preserved() -> None:
    handler = _Handler([httpx.Response(404, json={"message": "gone"}, headers={"X-Trace-ID": "trace-77"})])

    with pytest.raises(ApiError) as captured:
        asyncio.run(_client(handler).delete_record("tkn", "1"))

    assert captured.value.code == "HTTP_ERROR"
    assert captured.value.message == "gone"
    assert captured.value.trace_id == "trace-77"
    assert captured.value.is_not_found


def test_exhausted_transport_retries_raise_network_error() -> None:
    handler = _Handler([httpx.ConnectError("refused")] * 3)

    with pytest.raises(ApiError) as captured:
        asyncio.run(_client(handler).list_records("tkn"))

    assert captured.value.code == "NETWORK_ERROR"
    assert len(handler.requests) == 3


def test_normalize_listing_shapes() -> None:
    assert normalize_listing(None) == []
    assert normalize_listing({"data": [{"id": 1}, "junk"]}) == [{"id": 1}]
    assert normalize_listing({"unexpected": True}) == []
    with pytest.raises(TypeError):
        normalize_listing("text")
