from __future__ import annotations

from travel_admin.app.application.list_controller import EntityListController, Navigate
from travel_admin.app.config import AppConfig
from travel_admin.app.resources import get_resource
from travel_admin.app.state import SessionContext
from travel_admin.app.ui.components.mutation_feedback import StatusFeedback
from travel_admin.clients.http_client import HttpClient
from travel_admin.clients.records_client import RecordsClient


def build_list_controller(
    resource_key: str,
    *,
    config: AppConfig,
    context: SessionContext,
    navigate: Navigate,
    feedback: StatusFeedback | None = None,
    http_client: HttpClient | None = None,
) -> EntityListController:
    resource = get_resource(resource_key)
    records = RecordsClient(http_client or HttpClient(config=config), resource.api_path)

    async def fetch_collection():
        return await records.list_records(context.access_token)

    async def delete_record(record_id: str) -> None:
        await records.delete_record(context.access_token, record_id)

    return EntityListController(
        resource,
        fetch_collection=fetch_collection,
        delete_record=delete_record,
        navigate=navigate,
        context=context,
        feedback=feedback,
        page_size=config.page_size,
        page_siblings=config.page_siblings,
    )
