from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from travel_admin.app.infrastructure.errors.error_mapper import ErrorMapper

if TYPE_CHECKING:
    from travel_admin.app.application.mutation_orchestrator import MutationTicket


@dataclass(frozen=True)
class FeedbackMessages:
    pending: str = "Deleting data..."
    success: str = "Success delete data"
    failure: str = "Failed delete data"


class StatusFeedback(Protocol):
    def pending(self, ticket: MutationTicket) -> None: ...

    def success(self, ticket: MutationTicket) -> None: ...

    def failure(self, ticket: MutationTicket) -> None: ...


@dataclass
class NotificationCenter:
    """Keeps toasts for the presentation layer; pending toasts are replaced on settle."""

    messages: FeedbackMessages = field(default_factory=FeedbackMessages)
    items: list[dict[str, Any]] = field(default_factory=list)

    def pending(self, ticket: MutationTicket) -> None:
        self._toast(ticket, level="loading", message=self.messages.pending)

    def success(self, ticket: MutationTicket) -> None:
        self._toast(ticket, level="success", message=self.messages.success)

    def failure(self, ticket: MutationTicket) -> None:
        details = ErrorMapper.to_payload(ticket.error) if ticket.error is not None else {}
        self._toast(ticket, level="error", message=self.messages.failure, details=details)

    def latest(self, label: str) -> dict[str, Any] | None:
        return next((item for item in self.items if item["label"] == label), None)

    def render(self) -> dict[str, Any]:
        return {"count": len(self.items), "messages": list(self.items)}

    def clear(self) -> None:
        self.items.clear()

    def _toast(self, ticket: MutationTicket, *, level: str, message: str, details: dict[str, Any] | None = None) -> None:
        self.items = [item for item in self.items if item["label"] != ticket.label]
        self.items.insert(0, {"label": ticket.label, "level": level, "message": message, "details": details or {}})


class ConsoleFeedback:
    def __init__(self, messages: FeedbackMessages | None = None) -> None:
        self.messages = messages or FeedbackMessages()

    def pending(self, ticket: MutationTicket) -> None:
        print(f"[pending] {self.messages.pending} target={ticket.target_id}")

    def success(self, ticket: MutationTicket) -> None:
        print(f"[success] {self.messages.success} target={ticket.target_id}")

    def failure(self, ticket: MutationTicket) -> None:
        reason = ErrorMapper.to_display_message(ticket.error) if ticket.error is not None else "unknown"
        print(f"[mutation-error] {self.messages.failure} target={ticket.target_id} {reason}")
