"""Execution recording: one record per (workflow, ticket) run with an append-only step log."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from app.application.interfaces.repositories import IWorkflowExecutionRepository
from app.domain.entities.execution import ExecutionRecord, StepEntry
from app.domain.exceptions import (
    ExecutionAlreadyFinalizedException,
    ResourceNotFoundException,
)
from app.shared.enums import NodeKind, StepPhase, WorkflowExecutionStatus
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class ExecutionRecorder:
    """Creates, appends to and finalizes execution records.

    Steps are persisted as they are appended, so a failed record keeps the
    steps that ran before the failure. Terminal transitions happen once:
    finalizing a record that is no longer RUNNING raises
    ExecutionAlreadyFinalizedException.
    """

    def __init__(
        self,
        execution_repo: IWorkflowExecutionRepository,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.execution_repo = execution_repo
        self._clock = clock

    async def begin(self, workflow_id: str, ticket_id: str) -> str:
        """Create a RUNNING record and return its id."""
        record = await self.execution_repo.create_execution(
            workflow_id, ticket_id, self._clock()
        )
        return record.id

    async def append_step(
        self,
        record_id: str,
        node_id: str,
        node_kind: NodeKind,
        phase: StepPhase,
    ) -> StepEntry:
        entry = StepEntry(
            node_id=node_id,
            node_kind=node_kind,
            phase=phase,
            timestamp=self._clock(),
        )
        await self.execution_repo.append_step(record_id, entry)
        return entry

    async def complete(self, record_id: str) -> None:
        """Mark the record COMPLETED."""
        await self._finalize(record_id, WorkflowExecutionStatus.COMPLETED, None)

    async def fail(self, record_id: str, error: str) -> None:
        """Mark the record FAILED with the error message."""
        await self._finalize(record_id, WorkflowExecutionStatus.FAILED, error)

    async def get(self, record_id: str) -> ExecutionRecord | None:
        return await self.execution_repo.get_by_id(record_id)

    async def list_for_workflow(
        self, workflow_id: str, limit: int = 50
    ) -> list[ExecutionRecord]:
        """Return the workflow's records, most recently started first."""
        return await self.execution_repo.get_by_workflow(workflow_id, limit=limit)

    async def _finalize(
        self,
        record_id: str,
        status: WorkflowExecutionStatus,
        error: str | None,
    ) -> None:
        updated = await self.execution_repo.finalize(
            record_id, status, self._clock(), error
        )
        if updated:
            return
        if await self.execution_repo.get_by_id(record_id) is None:
            raise ResourceNotFoundException("workflow_execution", record_id)
        logger.warning(
            "Execution %s already finalized; cannot mark %s", record_id, status.value
        )
        raise ExecutionAlreadyFinalizedException(record_id)
