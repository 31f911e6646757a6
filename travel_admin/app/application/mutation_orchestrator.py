from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from travel_admin.app.infrastructure.errors.exceptions import DuplicateMutation, MutationFailed
from travel_admin.app.infrastructure.logging.logger import get_logger, log_action
from travel_admin.app.ui.components.mutation_feedback import StatusFeedback

logger = get_logger("travel_admin.mutations")

Operation = Callable[[], Awaitable[None]]
SettledCallback = Callable[["MutationTicket"], Awaitable[None] | None]


class MutationStatus(str, Enum):
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class MutationTicket:
    label: str
    target_id: str | None = None
    status: MutationStatus = MutationStatus.PENDING
    error: MutationFailed | None = None
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    settled_at: datetime | None = None
    _task: asyncio.Task | None = field(default=None, repr=False, compare=False)

    @property
    def is_pending(self) -> bool:
        return self.status is MutationStatus.PENDING

    async def wait(self) -> "MutationTicket":
        """Wait until the ticket settled and its on-settled callback finished."""
        if self._task is not None:
            await asyncio.shield(self._task)
        return self

    def _settle(self, status: MutationStatus, error: MutationFailed | None = None) -> None:
        self.status = status
        self.error = error
        self.settled_at = datetime.now(timezone.utc)


class MutationOrchestrator:
    """Runs remote writes as tracked tickets.

    One pending ticket per label; a second request for the same label is
    rejected with DuplicateMutation before the operation is called. Tickets
    with different labels run concurrently. Every settlement, successful or
    not, is followed by exactly one call of its on_settled callback.
    """

    def __init__(self, feedback: StatusFeedback | None = None) -> None:
        self.feedback = feedback
        self._in_flight: dict[str, MutationTicket] = {}

    def is_pending(self, label: str) -> bool:
        return label in self._in_flight

    def pending_labels(self) -> list[str]:
        return list(self._in_flight)

    def execute(
        self,
        label: str,
        operation: Operation,
        on_settled: SettledCallback | None = None,
        target_id: str | None = None,
    ) -> MutationTicket:
        if label in self._in_flight:
            log_action(logger, "mutations", label, "rejected_duplicate", target_id=target_id)
            raise DuplicateMutation(label)

        loop = asyncio.get_running_loop()
        ticket = MutationTicket(label=label, target_id=target_id)
        self._in_flight[label] = ticket
        log_action(logger, "mutations", label, "pending", target_id=target_id)
        if self.feedback is not None:
            self.feedback.pending(ticket)
        ticket._task = loop.create_task(self._run(ticket, operation, on_settled))
        return ticket

    async def _run(self, ticket: MutationTicket, operation: Operation, on_settled: SettledCallback | None) -> None:
        try:
            await operation()
        except Exception as error:  # noqa: BLE001
            ticket._settle(MutationStatus.FAILED, MutationFailed(ticket.label, cause=error))
        else:
            ticket._settle(MutationStatus.SUCCEEDED)
        finally:
            self._in_flight.pop(ticket.label, None)

        log_action(
            logger,
            "mutations",
            ticket.label,
            ticket.status.value,
            target_id=ticket.target_id,
            error=str(ticket.error.cause) if ticket.error and ticket.error.cause else None,
        )
        try:
            if self.feedback is not None:
                if ticket.status is MutationStatus.SUCCEEDED:
                    self.feedback.success(ticket)
                else:
                    self.feedback.failure(ticket)
        finally:
            if on_settled is not None:
                result = on_settled(ticket)
                if inspect.isawaitable(result):
                    await result
