import asyncio

import pytest

from travel_admin.app.application.mutation_orchestrator import MutationOrchestrator, MutationStatus, MutationTicket
from travel_admin.app.infrastructure.errors.exceptions import DuplicateMutation, MutationFailed
from travel_admin.clients.errors import ApiError


class _RecordingFeedback:
    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def pending(self, ticket: MutationTicket) -> None:
        self.events.append(("pending", ticket.label))

    def success(self, ticket: MutationTicket) -> None:
        self.events.append(("success", ticket.label))

    def failure(self, ticket: MutationTicket) -> None:
        self.events.append(("failure", ticket.label))


def test_successful_mutation_settles_then_calls_on_settled_once() -> None:
    feedback = _RecordingFeedback()
    orchestrator = MutationOrchestrator(feedback=feedback)
    settled: list[tuple[MutationStatus, bool]] = []

    async def _operation() -> None:
        return None

    async def _scenario() -> MutationTicket:
        ticket = orchestrator.execute(
            "booking:delete:1",
            _operation,
            on_settled=lambda t: settled.append((t.status, orchestrator.is_pending(t.label))),
            target_id="1",
        )
        assert ticket.is_pending
        assert orchestrator.pending_labels() == ["booking:delete:1"]
        return await ticket.wait()

    ticket = asyncio.run(_scenario())

    assert ticket.status is MutationStatus.SUCCEEDED
    assert ticket.settled_at is not None
    assert settled == [(MutationStatus.SUCCEEDED, False)]
    assert feedback.events == [("pending", "booking:delete:1"), ("success", "booking:delete:1")]
    assert orchestrator.pending_labels() == []


def test_failed_mutation_still_calls_on_settled_once() -> None:
    feedback = _RecordingFeedback()
    orchestrator = MutationOrchestrator(feedback=feedback)
    reloads: list[str] = []

    async def _operation() -> None:
        raise ApiError(code="PERMISSION_DENIED", message="no", status_code=403)

    async def _reload(ticket: MutationTicket) -> None:
        reloads.append(ticket.status.value)

    async def _scenario() -> MutationTicket:
        return await orchestrator.execute("user:delete:9", _operation, on_settled=_reload).wait()

    ticket = asyncio.run(_scenario())

    assert ticket.status is MutationStatus.FAILED
    assert isinstance(ticket.error, MutationFailed)
    assert isinstance(ticket.error.cause, ApiError)
    assert reloads == ["failed"]
    assert feedback.events[-1] == ("failure", "user:delete:9")


def test_duplicate_label_is_rejected_without_calling_operation() -> None:
    orchestrator = MutationOrchestrator()
    calls: list[str] = []
    settled: list[str] = []

    async def _scenario() -> None:
        gate = asyncio.Event()

        async def _operation() -> None:
            calls.append("delete")
            await gate.wait()

        first = orchestrator.execute("booking:delete:2", _operation, on_settled=lambda t: settled.append(t.label))
        await asyncio.sleep(0)

        with pytest.raises(DuplicateMutation):
            orchestrator.execute("booking:delete:2", _operation, on_settled=lambda t: settled.append(t.label))

        gate.set()
        await first.wait()

    asyncio.run(_scenario())

    assert calls == ["delete"]
    assert settled == ["booking:delete:2"]


def test_different_targets_run_concurrently() -> None:
    orchestrator = MutationOrchestrator()
    observed: list[list[str]] = []

    async def _scenario() -> None:
        gate = asyncio.Event()

        async def _operation() -> None:
            await gate.wait()

        first = orchestrator.execute("booking:delete:1", _operation)
        second = orchestrator.execute("booking:delete:2", _operation)
        await asyncio.sleep(0)
        observed.append(sorted(orchestrator.pending_labels()))
        gate.set()
        await asyncio.gather(first.wait(), second.wait())
        observed.append(orchestrator.pending_labels())

    asyncio.run(_scenario())

    assert observed == [["booking:delete:1", "booking:delete:2"], []]


def test_label_can_be_reused_after_settlement() -> None:
    orchestrator = MutationOrchestrator()

    async def _operation() -> None:
        return None

    async def _scenario() -> list[MutationStatus]:
        first = await orchestrator.execute("destination:delete:4", _operation).wait()
        second = await orchestrator.execute("destination:delete:4", _operation).wait()
        return [first.status, second.status]

    assert asyncio.run(_scenario()) == [MutationStatus.SUCCEEDED, MutationStatus.SUCCEEDED]
