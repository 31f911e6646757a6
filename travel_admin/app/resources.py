from __future__ import annotations

from dataclasses import dataclass

from travel_admin.app.ui.listing_view import ColumnDef


@dataclass(frozen=True)
class ResourceDef:
    key: str
    title: str
    api_path: str
    list_route: str
    columns: tuple[ColumnDef, ...]
    filter_field: str = "name"
    has_detail_view: bool = False

    @property
    def filter_placeholder(self) -> str:
        label = next((column.label for column in self.columns if column.field_key == self.filter_field), self.filter_field)
        return f"Filter by {label}..."

    def create_route(self) -> str:
        return f"/{self.key}/add"

    def edit_route(self, record_id: str) -> str:
        return f"/{self.key}/{record_id}/edit"

    def detail_route(self, record_id: str) -> str:
        if not self.has_detail_view:
            raise ValueError(f"{self.key} has no detail view")
        return f"/{self.key}/{record_id}"


RESOURCES: dict[str, ResourceDef] = {
    "booking": ResourceDef(
        key="booking",
        title="Manage Booking",
        api_path="bookings",
        list_route="/booking",
        columns=(
            ColumnDef("name", "Name"),
            ColumnDef("phone_number", "Phone Number"),
            ColumnDef("destination", "Destination"),
        ),
    ),
    "destination": ResourceDef(
        key="destination",
        title="Manage Destination",
        api_path="destinations",
        list_route="/",
        columns=(
            ColumnDef("name", "Name"),
            ColumnDef("location", "Location"),
            ColumnDef("price", "Price"),
        ),
    ),
    "user": ResourceDef(
        key="user",
        title="Manage User",
        api_path="users",
        list_route="/user",
        columns=(
            ColumnDef("username", "Username"),
            ColumnDef("email", "Email"),
        ),
        filter_field="username",
        has_detail_view=True,
    ),
}


def get_resource(key: str) -> ResourceDef:
    try:
        return RESOURCES[key]
    except KeyError as exc:
        raise ValueError(f"unknown resource {key!r}, expected one of {sorted(RESOURCES)}") from exc
