"""Repository integration tests against in-memory SQLite (aiosqlite)."""

from datetime import UTC, datetime, timedelta

import pytest

from app.application.dtos.ticket import TicketFieldUpdate
from app.application.dtos.workflow import WorkflowChanges, WorkflowCreate
from app.domain.entities.execution import StepEntry
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.models import Ticket, TicketMessage
from app.infrastructure.persistence.repositories import (
    TicketRepository,
    WorkflowExecutionRepository,
    WorkflowRepository,
)
from app.shared.enums import NodeKind, StepPhase, WorkflowExecutionStatus
from tests.support import ORG_ID, OTHER_ORG_ID, escalate_urgent_graph

T0 = datetime(2025, 3, 1, 9, 0, tzinfo=UTC)


async def _ticket(db_session, **fields) -> Ticket:
    ticket = Ticket(organization_id=ORG_ID, subject="Printer on fire", **fields)
    db_session.add(ticket)
    await db_session.commit()
    return ticket


def _create(name: str = "Escalate urgent", trigger_type: str = "ticket_created", **kw) -> WorkflowCreate:
    nodes, edges = escalate_urgent_graph()
    return WorkflowCreate(name=name, trigger_type=trigger_type, nodes=nodes, edges=edges, **kw)


# ---- Tickets ----


async def test_get_ticket_maps_defaults(db_session) -> None:
    ticket = await _ticket(db_session)
    found = await TicketRepository(db_session).get_ticket(ticket.id)
    assert found.status == "OPEN"
    assert found.priority == "NORMAL"
    assert found.organization_id == ORG_ID
    assert found.created_at.tzinfo is not None
    assert await TicketRepository(db_session).get_ticket("missing") is None


async def test_add_tag_is_idempotent(db_session) -> None:
    ticket = await _ticket(db_session)
    repo = TicketRepository(db_session)
    assert await repo.add_tag(ticket.id, "vip") is True
    assert await repo.add_tag(ticket.id, "vip") is False
    assert await repo.has_tag(ticket.id, "vip")
    assert not await repo.has_tag(ticket.id, "billing")


async def test_update_fields_writes_only_set_fields(db_session) -> None:
    ticket = await _ticket(db_session, priority="HIGH")
    repo = TicketRepository(db_session)
    await repo.update_fields(
        ticket.id,
        TicketFieldUpdate(status="ESCALATED", escalated_at=T0, escalated_reason="Too slow"),
    )
    found = await repo.get_ticket(ticket.id)
    assert found.status == "ESCALATED"
    assert found.priority == "HIGH"
    assert found.escalated_at == T0
    assert found.escalated_reason == "Too slow"


async def test_add_note_creates_internal_message(db_session) -> None:
    ticket = await _ticket(db_session)
    note_id = await TicketRepository(db_session).add_note(ticket.id, "system", "Auto-triaged")
    message = await db_session.get(TicketMessage, note_id)
    assert message.type == "NOTE"
    assert message.author_id == "system"
    assert message.content == "Auto-triaged"


async def test_ticket_writes_require_existing_ticket(db_session) -> None:
    repo = TicketRepository(db_session)
    with pytest.raises(ResourceNotFoundException):
        await repo.add_tag("ghost", "vip")
    with pytest.raises(ResourceNotFoundException):
        await repo.add_note("ghost", "system", "x")


# ---- Workflows ----


async def test_create_and_scope_workflow(db_session) -> None:
    repo = WorkflowRepository(db_session)
    created = await repo.create_workflow(ORG_ID, _create())
    await db_session.commit()
    assert created.id
    assert created.active is True
    assert created.created_at is not None
    assert (await repo.get_by_id_and_organization(created.id, ORG_ID)).name == "Escalate urgent"
    assert await repo.get_by_id_and_organization(created.id, OTHER_ORG_ID) is None


async def test_list_active_by_trigger_oldest_first(db_session) -> None:
    repo = WorkflowRepository(db_session)
    first = await repo.create_workflow(ORG_ID, _create("first"))
    second = await repo.create_workflow(ORG_ID, _create("second"))
    await repo.create_workflow(ORG_ID, _create("off", active=False))
    await repo.create_workflow(ORG_ID, _create("other", trigger_type="status_changed"))
    await repo.create_workflow(OTHER_ORG_ID, _create("foreign"))
    await db_session.commit()

    active = await repo.list_active_by_trigger(ORG_ID, "ticket_created")
    assert [w.id for w in active] == [first.id, second.id]
    listed = await repo.list_by_organization(ORG_ID)
    assert [w.name for w in listed] == ["other", "off", "second", "first"]


async def test_update_replaces_graph_and_keeps_unset_fields(db_session) -> None:
    repo = WorkflowRepository(db_session)
    created = await repo.create_workflow(ORG_ID, _create(description="keep me"))
    new_nodes = [{"id": "t", "type": "trigger", "data": {}}]
    updated = await repo.update_workflow(
        created.id, ORG_ID, WorkflowChanges(nodes=new_nodes, edges=[], active=False)
    )
    assert updated.nodes == new_nodes
    assert updated.edges == []
    assert updated.active is False
    assert updated.description == "keep me"
    assert await repo.update_workflow(created.id, OTHER_ORG_ID, WorkflowChanges(name="x")) is None


# ---- Executions ----


async def test_execution_step_log_and_single_finalize(db_session) -> None:
    workflow = await WorkflowRepository(db_session, autocommit=True).create_workflow(ORG_ID, _create())
    repo = WorkflowExecutionRepository(db_session)
    record = await repo.create_execution(workflow.id, "tk1", T0)
    assert record.status == WorkflowExecutionStatus.RUNNING

    for phase in (StepPhase.STARTED, StepPhase.COMPLETED):
        await repo.append_step(record.id, StepEntry("t", NodeKind.TRIGGER, phase, T0))

    assert await repo.finalize(record.id, WorkflowExecutionStatus.COMPLETED, T0 + timedelta(seconds=1)) is True
    assert await repo.finalize(record.id, WorkflowExecutionStatus.FAILED, T0, "late") is False

    stored = await repo.get_by_id(record.id)
    assert stored.status == WorkflowExecutionStatus.COMPLETED
    assert stored.error_message is None
    assert stored.completed_at == T0 + timedelta(seconds=1)
    assert [(s.node_id, s.phase) for s in stored.step_log] == [
        ("t", StepPhase.STARTED),
        ("t", StepPhase.COMPLETED),
    ]


async def test_append_step_to_missing_record(db_session) -> None:
    with pytest.raises(ResourceNotFoundException):
        await WorkflowExecutionRepository(db_session).append_step(
            "nope", StepEntry("t", NodeKind.TRIGGER, StepPhase.STARTED, T0)
        )


async def test_history_newest_first_with_limit_and_delete(db_session) -> None:
    workflow = await WorkflowRepository(db_session, autocommit=True).create_workflow(ORG_ID, _create())
    repo = WorkflowExecutionRepository(db_session)
    ids = [
        (await repo.create_execution(workflow.id, f"tk{i}", T0 + timedelta(minutes=i))).id
        for i in range(3)
    ]

    history = await repo.get_by_workflow(workflow.id)
    assert [r.id for r in history] == list(reversed(ids))
    assert [r.id for r in await repo.get_by_workflow(workflow.id, limit=2)] == [ids[2], ids[1]]

    assert await repo.delete_by_workflow(workflow.id) == 3
    assert await repo.get_by_workflow(workflow.id) == []
