"""Test support: graph builders and in-memory implementations of the application ports."""

from __future__ import annotations

import dataclasses
from datetime import UTC, datetime
from typing import Any

from app.application.dtos.ticket import TicketFieldUpdate, TicketResult
from app.domain.entities.execution import ExecutionRecord, StepEntry
from app.domain.entities.workflow import WorkflowEntity
from app.domain.enums import TicketPriority, TicketStatus
from app.domain.exceptions import ResourceNotFoundException
from app.shared.enums import WorkflowExecutionStatus

ORG_ID = "org_acme"
OTHER_ORG_ID = "org_globex"
TICKET_CREATED_AT = datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC)


# ---- Graph builders ----


def trigger(node_id: str = "t") -> dict[str, Any]:
    return {"id": node_id, "type": "trigger", "data": {}}


def condition(node_id: str, condition_type: str, **data: Any) -> dict[str, Any]:
    return {
        "id": node_id,
        "type": "condition",
        "data": {"conditionType": condition_type, **data},
    }


def action(node_id: str, action_type: str, **data: Any) -> dict[str, Any]:
    return {
        "id": node_id,
        "type": "action",
        "data": {"actionType": action_type, **data},
    }


def edge(source: str, target: str) -> dict[str, Any]:
    return {"id": f"{source}-{target}", "source": source, "target": target}


def escalate_urgent_graph() -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """trigger -> priority == URGENT -> escalate."""
    return (
        [
            trigger("t"),
            condition("c", "priority", value="URGENT"),
            action("a", "escalate"),
        ],
        [edge("t", "c"), edge("c", "a")],
    )


# ---- In-memory fakes ----


class InMemoryTicketStore:
    """ITicketStore over plain dicts."""

    def __init__(self) -> None:
        self.tickets: dict[str, TicketResult] = {}
        self.tags: set[tuple[str, str]] = set()
        self.notes: list[tuple[str, str, str]] = []

    def put(
        self,
        ticket_id: str,
        *,
        organization_id: str = ORG_ID,
        status: str = TicketStatus.OPEN.value,
        priority: str = TicketPriority.NORMAL.value,
        created_at: datetime = TICKET_CREATED_AT,
    ) -> TicketResult:
        ticket = TicketResult(
            id=ticket_id,
            organization_id=organization_id,
            status=status,
            priority=priority,
            assignee_id=None,
            escalated_at=None,
            escalated_reason=None,
            created_at=created_at,
        )
        self.tickets[ticket_id] = ticket
        return ticket

    async def get_ticket(self, ticket_id: str) -> TicketResult | None:
        return self.tickets.get(ticket_id)

    async def has_tag(self, ticket_id: str, tag_id: str) -> bool:
        return (ticket_id, tag_id) in self.tags

    async def add_tag(self, ticket_id: str, tag_id: str) -> bool:
        self._require(ticket_id)
        if (ticket_id, tag_id) in self.tags:
            return False
        self.tags.add((ticket_id, tag_id))
        return True

    async def update_fields(self, ticket_id: str, update: TicketFieldUpdate) -> None:
        ticket = self._require(ticket_id)
        self.tickets[ticket_id] = dataclasses.replace(ticket, **update.as_values())

    async def add_note(self, ticket_id: str, author_id: str, content: str) -> str:
        self._require(ticket_id)
        self.notes.append((ticket_id, author_id, content))
        return f"note-{len(self.notes)}"

    def _require(self, ticket_id: str) -> TicketResult:
        ticket = self.tickets.get(ticket_id)
        if ticket is None:
            raise ResourceNotFoundException("ticket", ticket_id)
        return ticket


class InMemoryWorkflowRepository:
    """The read side of IWorkflowRepository used by the executor and dispatcher."""

    def __init__(self) -> None:
        self.workflows: dict[str, WorkflowEntity] = {}

    def put(
        self,
        workflow_id: str,
        nodes: list[dict[str, Any]],
        edges: list[dict[str, Any]],
        *,
        organization_id: str = ORG_ID,
        trigger_type: str = "ticket_created",
        active: bool = True,
    ) -> WorkflowEntity:
        workflow = WorkflowEntity(
            id=workflow_id,
            organization_id=organization_id,
            name=workflow_id,
            description=None,
            trigger_type=trigger_type,
            nodes=nodes,
            edges=edges,
            active=active,
        )
        self.workflows[workflow_id] = workflow
        return workflow

    async def get_by_id(self, workflow_id: str) -> WorkflowEntity | None:
        return self.workflows.get(workflow_id)

    async def get_by_id_and_organization(
        self, workflow_id: str, organization_id: str
    ) -> WorkflowEntity | None:
        workflow = self.workflows.get(workflow_id)
        if workflow and workflow.belongs_to_organization(organization_id):
            return workflow
        return None

    async def list_active_by_trigger(
        self, organization_id: str, trigger_type: str
    ) -> list[WorkflowEntity]:
        return [
            w
            for w in self.workflows.values()
            if w.belongs_to_organization(organization_id) and w.can_trigger_on(trigger_type)
        ]


class InMemoryExecutionRepository:
    """IWorkflowExecutionRepository over a dict; returns copies like a real store."""

    def __init__(self) -> None:
        self.records: dict[str, ExecutionRecord] = {}

    async def create_execution(
        self, workflow_id: str, ticket_id: str, started_at: datetime
    ) -> ExecutionRecord:
        record = ExecutionRecord(
            id=f"exec-{len(self.records) + 1}",
            workflow_id=workflow_id,
            ticket_id=ticket_id,
            status=WorkflowExecutionStatus.RUNNING,
            started_at=started_at,
        )
        self.records[record.id] = record
        return self._copy(record)

    async def append_step(self, execution_id: str, entry: StepEntry) -> None:
        record = self.records.get(execution_id)
        if record is None:
            raise ResourceNotFoundException("workflow_execution", execution_id)
        record.step_log.append(entry)

    async def finalize(
        self,
        execution_id: str,
        status: WorkflowExecutionStatus,
        completed_at: datetime,
        error_message: str | None = None,
    ) -> bool:
        record = self.records.get(execution_id)
        if record is None or record.status is not WorkflowExecutionStatus.RUNNING:
            return False
        record.status = status
        record.completed_at = completed_at
        record.error_message = error_message
        return True

    async def get_by_id(self, execution_id: str) -> ExecutionRecord | None:
        record = self.records.get(execution_id)
        return self._copy(record) if record else None

    async def get_by_workflow(
        self, workflow_id: str, limit: int = 50
    ) -> list[ExecutionRecord]:
        matching = [r for r in self.records.values() if r.workflow_id == workflow_id]
        matching.sort(key=lambda r: r.started_at, reverse=True)
        return [self._copy(r) for r in matching[:limit]]

    async def delete_by_workflow(self, workflow_id: str) -> int:
        doomed = [k for k, r in self.records.items() if r.workflow_id == workflow_id]
        for key in doomed:
            del self.records[key]
        return len(doomed)

    @staticmethod
    def _copy(record: ExecutionRecord) -> ExecutionRecord:
        return dataclasses.replace(record, step_log=list(record.step_log))


class RecordingWebhookSender:
    """IWebhookSender that records calls; raises `error` when set."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.error = error

    async def send(self, url: str, payload: dict[str, Any]) -> int:
        self.calls.append((url, payload))
        if self.error is not None:
            raise self.error
        return 200
