from __future__ import annotations

import itertools
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from travel_admin.app.application.mutation_orchestrator import MutationOrchestrator, MutationTicket
from travel_admin.app.domain.models.record import Record, to_records
from travel_admin.app.infrastructure.errors.exceptions import ConfirmationRequired, FetchFailed
from travel_admin.app.infrastructure.logging.logger import get_logger, log_action
from travel_admin.app.resources import ResourceDef
from travel_admin.app.state import SessionContext
from travel_admin.app.ui.components.mutation_feedback import StatusFeedback
from travel_admin.app.ui.listing_view import HeaderBinding, RowBinding, bind_row
from travel_admin.app.ui.pagination_window import PageWindowEntry, PaginationWindow
from travel_admin.app.ui.table_state import TableStateEngine

logger = get_logger("travel_admin.listing")

FetchCollection = Callable[[], Awaitable[Sequence[Record | Mapping[str, Any]]]]
DeleteRecord = Callable[[str], Awaitable[None]]
Navigate = Callable[[str], None]

CONFIRM_TITLE = "Are you sure to delete this data?"
CONFIRM_DESCRIPTION = "This action cannot be undone"


class ListStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass(frozen=True)
class PendingDeletion:
    record_id: str
    title: str = CONFIRM_TITLE
    description: str = CONFIRM_DESCRIPTION


@dataclass(frozen=True)
class PaginationBinding:
    entries: list[PageWindowEntry]
    active_page: int
    page_count: int
    can_previous: bool
    can_next: bool
    visible: bool


class EntityListController:
    """Local sortable, filterable, paged view of one remote collection.

    The collection is only ever replaced wholesale by ``load``; deletes go
    through the mutation orchestrator and always end with a full reload.
    """

    def __init__(
        self,
        resource: ResourceDef,
        fetch_collection: FetchCollection,
        delete_record: DeleteRecord,
        navigate: Navigate,
        context: SessionContext,
        feedback: StatusFeedback | None = None,
        page_size: int = 10,
        page_siblings: int = 1,
        orchestrator: MutationOrchestrator | None = None,
    ) -> None:
        self.resource = resource
        self.context = context
        self._fetch_collection = fetch_collection
        self._delete_record = delete_record
        self._navigate = navigate
        self.orchestrator = orchestrator or MutationOrchestrator(feedback=feedback)
        self.table = TableStateEngine(page_size=page_size)
        self.window = PaginationWindow(total_pages=0, siblings=page_siblings)
        self.status = ListStatus.IDLE
        self.error: FetchFailed | None = None
        self.pending_deletion: PendingDeletion | None = None
        self._collection: tuple[Record, ...] = ()
        self._request_ids = itertools.count(1)
        self._latest_request_id = 0
        self._has_loaded = False

    @property
    def collection(self) -> tuple[Record, ...]:
        return self._collection

    @property
    def is_empty(self) -> bool:
        return not self.table.visible_rows()

    # loading

    async def load(self) -> None:
        request_id = next(self._request_ids)
        self._latest_request_id = request_id
        self.status = ListStatus.LOADING
        log_action(logger, self.resource.key, "load", "started", request_id=request_id)

        try:
            rows = to_records(await self._fetch_collection())
        except Exception as error:  # noqa: BLE001
            if request_id != self._latest_request_id:
                log_action(logger, self.resource.key, "load", "stale_discarded", request_id=request_id)
                return
            self.error = FetchFailed(self.resource.key, cause=error)
            self.status = ListStatus.ERROR
            log_action(logger, self.resource.key, "load", "error", request_id=request_id, error=str(error))
            return

        if request_id != self._latest_request_id:
            log_action(logger, self.resource.key, "load", "stale_discarded", request_id=request_id)
            return

        self._collection = rows
        if not self._has_loaded:
            self.table.reset()
            self._has_loaded = True
        self.table.set_collection(rows)
        self._sync_window()
        self.error = None
        self.status = ListStatus.LOADED
        log_action(logger, self.resource.key, "load", "success", request_id=request_id, rows=len(rows))

    async def retry(self) -> None:
        await self.load()

    # table bindings

    def visible_rows(self) -> list[Record]:
        return self.table.visible_rows()

    def rows(self) -> list[RowBinding]:
        return [
            bind_row(record, list(self.resource.columns), delete_pending=self.delete_pending(record.id))
            for record in self.table.visible_rows()
        ]

    def headers(self) -> list[HeaderBinding]:
        return [
            HeaderBinding(
                field_key=column.field_key,
                label=column.label,
                sortable=column.sortable,
                sort_direction=self.table.sort_direction(column.field_key),
            )
            for column in self.resource.columns
        ]

    def toggle_sort(self, field_key: str, multi: bool = False) -> str | None:
        column = next((item for item in self.resource.columns if item.field_key == field_key), None)
        if column is not None and not column.sortable:
            raise ValueError(f"column {field_key} is not sortable")
        direction = self.table.set_sort(field_key, multi=multi)
        self._sync_window()
        return direction

    def filter_value(self, field_key: str | None = None) -> str:
        return self.table.filter_value(field_key or self.resource.filter_field)

    def set_filter(self, field_key: str, value: str | None) -> None:
        self.table.set_filter(field_key, value)
        self._sync_window()

    # pagination bindings

    def pagination(self) -> PaginationBinding:
        return PaginationBinding(
            entries=self.window.entries,
            active_page=self.window.active_page,
            page_count=self.table.page_count(),
            can_previous=self.table.can_previous_page(),
            can_next=self.table.can_next_page(),
            visible=len(self._collection) > self.table.pagination.page_size,
        )

    def first_page(self) -> None:
        self.table.first_page()
        self.window.first()

    def last_page(self) -> None:
        self.table.last_page()
        self.window.last()

    def next_page(self) -> None:
        self.table.next_page()
        self.window.next()

    def previous_page(self) -> None:
        self.table.previous_page()
        self.window.previous()

    def go_to_page(self, page: int) -> None:
        self.table.set_page_index(page - 1)
        self.window.set_page(page)

    # delete flow

    def request_delete(self, record_id: str) -> PendingDeletion:
        self.pending_deletion = PendingDeletion(record_id=str(record_id))
        return self.pending_deletion

    def cancel_delete(self) -> None:
        self.pending_deletion = None

    def confirm_delete(self, record_id: str) -> MutationTicket:
        record_id = str(record_id)
        if self.pending_deletion is None or self.pending_deletion.record_id != record_id:
            log_action(logger, self.resource.key, "delete", "confirmation_missing", record_id=record_id)
            raise ConfirmationRequired(record_id)
        self.pending_deletion = None
        return self.orchestrator.execute(
            self._delete_label(record_id),
            lambda: self._delete_record(record_id),
            on_settled=self._reload_after_mutation,
            target_id=record_id,
        )

    def delete_pending(self, record_id: str) -> bool:
        return self.orchestrator.is_pending(self._delete_label(str(record_id)))

    # navigation

    def open_create(self) -> None:
        self._go(self.resource.create_route())

    def open_edit(self, record_id: str) -> None:
        self._go(self.resource.edit_route(str(record_id)))

    def open_detail(self, record_id: str) -> None:
        self._go(self.resource.detail_route(str(record_id)))

    def _go(self, route: str) -> None:
        log_action(logger, self.resource.key, "navigate", "requested", route=route)
        self._navigate(route)

    async def _reload_after_mutation(self, ticket: MutationTicket) -> None:
        await self.load()

    def _delete_label(self, record_id: str) -> str:
        return f"{self.resource.key}:delete:{record_id}"

    def _sync_window(self) -> None:
        self.window.reset(self.table.page_count(), self.table.pagination.page_index + 1)
