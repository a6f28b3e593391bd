"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference domain entities or application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.ticket import TicketFieldUpdate, TicketResult
    from app.application.dtos.workflow import WorkflowChanges, WorkflowCreate
    from app.domain.entities.execution import ExecutionRecord, StepEntry
    from app.domain.entities.workflow import WorkflowEntity
    from app.shared.enums import WorkflowExecutionStatus


# Workflow definition store
class IWorkflowRepository(Protocol):
    """Protocol for workflow definition persistence (organization-scoped)."""

    async def get_by_id(self, workflow_id: str) -> WorkflowEntity | None:
        """Return workflow by ID regardless of organization (engine use)."""

    async def get_by_id_and_organization(
        self, workflow_id: str, organization_id: str
    ) -> WorkflowEntity | None:
        """Return workflow by ID when it belongs to the organization."""

    async def list_by_organization(self, organization_id: str) -> list[WorkflowEntity]:
        """Return all workflows of the organization, newest first."""

    async def list_active_by_trigger(
        self, organization_id: str, trigger_type: str
    ) -> list[WorkflowEntity]:
        """Return active workflows for the trigger type, oldest first (creation order)."""

    async def create_workflow(
        self, organization_id: str, data: WorkflowCreate
    ) -> WorkflowEntity:
        """Persist a new workflow definition."""

    async def update_workflow(
        self, workflow_id: str, organization_id: str, changes: WorkflowChanges
    ) -> WorkflowEntity | None:
        """Apply a partial update; return None when the workflow is not found."""

    async def delete_workflow(self, workflow_id: str, organization_id: str) -> bool:
        """Delete the workflow row; return False when not found."""


# Execution record store
class IWorkflowExecutionRepository(Protocol):
    """Protocol for execution records and their append-only step log."""

    async def create_execution(
        self, workflow_id: str, ticket_id: str, started_at: datetime
    ) -> ExecutionRecord:
        """Insert a record in RUNNING status with an empty step log."""

    async def append_step(self, execution_id: str, entry: StepEntry) -> None:
        """Append one entry to the record's step log and persist it."""

    async def finalize(
        self,
        execution_id: str,
        status: WorkflowExecutionStatus,
        completed_at: datetime,
        error_message: str | None = None,
    ) -> bool:
        """Move a RUNNING record to a terminal status. Return False when it was not RUNNING."""

    async def get_by_id(self, execution_id: str) -> ExecutionRecord | None:
        """Return execution record by ID."""

    async def get_by_workflow(self, workflow_id: str, limit: int = 50) -> list[ExecutionRecord]:
        """Return records for the workflow, most recently started first."""

    async def delete_by_workflow(self, workflow_id: str) -> int:
        """Delete every record of the workflow; return the number deleted."""


# Ticket store (host ticket system)
class ITicketStore(Protocol):
    """Protocol for the narrow slice of the ticket system that workflows read and write."""

    async def get_ticket(self, ticket_id: str) -> TicketResult | None:
        """Return current ticket state, or None when the ticket does not exist."""

    async def has_tag(self, ticket_id: str, tag_id: str) -> bool:
        """Return whether the (ticket, tag) association exists."""

    async def add_tag(self, ticket_id: str, tag_id: str) -> bool:
        """Create the association; return False when it already existed. Raises ResourceNotFoundException."""

    async def update_fields(self, ticket_id: str, update: TicketFieldUpdate) -> None:
        """Write the set fields of update. Raises ResourceNotFoundException."""

    async def add_note(self, ticket_id: str, author_id: str, content: str) -> str:
        """Create a note-type message; return its ID. Raises ResourceNotFoundException."""
