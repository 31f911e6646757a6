import asyncio
from collections.abc import Iterator

from travel_admin.app.application.list_controller import EntityListController
from travel_admin.app.main import run_listing
from travel_admin.app.resources import get_resource
from travel_admin.app.state import SessionContext
from travel_admin.app.ui.components.mutation_feedback import ConsoleFeedback
from travel_admin.clients.errors import ApiError


class _Store:
    def __init__(self, rows: list[dict]) -> None:
        self.rows = rows
        self.fetch_calls = 0
        self.deleted: list[str] = []
        self.offline = False

    async def fetch(self) -> list[dict]:
        self.fetch_calls += 1
        if self.offline:
            self.offline = False
            raise ApiError(code="NETWORK_ERROR", message="offline")
        return list(self.rows)

    async def delete(self, record_id: str) -> None:
        self.deleted.append(record_id)
        self.rows = [row for row in self.rows if row["id"] != record_id]


def _controller(store: _Store, routes: list[str]) -> EntityListController:
    return EntityListController(
        get_resource("booking"),
        fetch_collection=store.fetch,
        delete_record=store.delete,
        navigate=routes.append,
        context=SessionContext(access_token="token", theme="light"),
        feedback=ConsoleFeedback(),
    )


def _answers(monkeypatch, values: list[str]) -> None:
    answers: Iterator[str] = iter(values)
    monkeypatch.setattr("builtins.input", lambda _: next(answers))


def test_console_delete_requires_typed_confirmation(monkeypatch, capsys) -> None:
    store = _Store([{"id": "1", "name": "Bob"}, {"id": "2", "name": "Amy"}])
    controller = _controller(store, [])
    _answers(monkeypatch, ["x", "2", "no", "x", "2", "delete", "b"])

    asyncio.run(run_listing(controller))

    output = capsys.readouterr().out
    assert store.deleted == ["2"]
    assert store.fetch_calls == 2
    assert "Are you sure to delete this data?" in output
    assert "Cancelled." in output
    assert "[success] Success delete data target=2" in output
    assert [record.id for record in controller.collection] == ["1"]


def test_console_retry_after_fetch_error(monkeypatch, capsys) -> None:
    store = _Store([{"id": "1", "name": "Bob"}])
    store.offline = True
    controller = _controller(store, [])
    _answers(monkeypatch, ["r", "b"])

    asyncio.run(run_listing(controller))

    output = capsys.readouterr().out
    assert "[error] [NETWORK_ERROR]" in output
    assert "Manage Booking" in output
    assert store.fetch_calls == 2


def test_console_sort_filter_theme_and_navigation(monkeypatch, capsys) -> None:
    store = _Store([{"id": "1", "name": "Bob"}, {"id": "2", "name": "Amy"}])
    routes: list[str] = []
    controller = _controller(store, routes)
    _answers(monkeypatch, ["s", "name", "/", "am", "t", "a", "e", "2", "x", "9", "delete", "b"])

    asyncio.run(run_listing(controller))

    output = capsys.readouterr().out
    assert controller.table.sort_direction("name") == "asc"
    assert controller.filter_value() == "am"
    assert controller.context.theme == "dark"
    assert routes == ["/booking/add", "/booking/2/edit"]
    assert "Filter by Name... [am]" in output
    assert store.deleted == ["9"]
