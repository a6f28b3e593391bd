"""Workflow execution repository: records and their append-only step log."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.entities.execution import ExecutionRecord, StepEntry
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.models.workflow import WorkflowExecution
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.enums import WorkflowExecutionStatus
from app.shared.utils.datetime import ensure_utc


def _to_record(e: WorkflowExecution) -> ExecutionRecord:
    """Map WorkflowExecution ORM to ExecutionRecord."""
    return ExecutionRecord(
        id=e.id,
        workflow_id=e.workflow_id,
        ticket_id=e.ticket_id,
        status=WorkflowExecutionStatus(e.status),
        started_at=ensure_utc(e.started_at),
        completed_at=ensure_utc(e.completed_at),
        step_log=[StepEntry.from_dict(item) for item in e.execution_log or []],
        error_message=e.error_message,
    )


class WorkflowExecutionRepository(BaseRepository[WorkflowExecution]):
    """Execution repository. Implements IWorkflowExecutionRepository.

    Commits every write by default so a record is visible to other sessions
    (history, cancellation) while its walk is still running.
    """

    def __init__(self, db: AsyncSession, *, autocommit: bool = True) -> None:
        super().__init__(db, WorkflowExecution, autocommit=autocommit)

    async def create_execution(
        self, workflow_id: str, ticket_id: str, started_at: datetime
    ) -> ExecutionRecord:
        execution = WorkflowExecution(
            workflow_id=workflow_id,
            ticket_id=ticket_id,
            status=WorkflowExecutionStatus.RUNNING.value,
            started_at=started_at,
            execution_log=[],
        )
        return _to_record(await self.add(execution))

    async def append_step(self, execution_id: str, entry: StepEntry) -> None:
        execution = await self.get_model(execution_id)
        if execution is None:
            raise ResourceNotFoundException("workflow_execution", execution_id)
        # Reassign so the JSON column is marked dirty.
        execution.execution_log = [*(execution.execution_log or []), entry.to_dict()]
        await self._save()

    async def finalize(
        self,
        execution_id: str,
        status: WorkflowExecutionStatus,
        completed_at: datetime,
        error_message: str | None = None,
    ) -> bool:
        """Conditional UPDATE ... WHERE status = 'running'; True when a row moved."""
        result = await self.db.execute(
            update(WorkflowExecution)
            .where(
                WorkflowExecution.id == execution_id,
                WorkflowExecution.status == WorkflowExecutionStatus.RUNNING.value,
            )
            .values(
                status=status.value,
                completed_at=completed_at,
                error_message=error_message,
            )
            .execution_options(synchronize_session=False)
        )
        await self._save()
        return result.rowcount == 1

    async def get_by_id(self, execution_id: str) -> ExecutionRecord | None:
        row = await self.get_model(execution_id)
        return _to_record(row) if row else None

    async def get_by_workflow(
        self, workflow_id: str, limit: int = 50
    ) -> list[ExecutionRecord]:
        result = await self.db.execute(
            select(WorkflowExecution)
            .where(WorkflowExecution.workflow_id == workflow_id)
            .order_by(WorkflowExecution.started_at.desc())
            .limit(limit)
        )
        return [_to_record(e) for e in result.scalars().all()]

    async def delete_by_workflow(self, workflow_id: str) -> int:
        result = await self.db.execute(
            delete(WorkflowExecution)
            .where(WorkflowExecution.workflow_id == workflow_id)
            .execution_options(synchronize_session=False)
        )
        await self._save()
        return result.rowcount or 0
