"""Workflow management use cases: definition CRUD, execution history, cancellation."""

from __future__ import annotations

from app.application.dtos.workflow import WorkflowChanges, WorkflowCreate
from app.application.interfaces.repositories import (
    IWorkflowExecutionRepository,
    IWorkflowRepository,
)
from app.application.services.execution_recorder import ExecutionRecorder
from app.core.execution_coordinator import ExecutionCoordinator
from app.domain.entities.execution import ExecutionRecord
from app.domain.entities.workflow import WorkflowEntity, WorkflowGraph
from app.domain.exceptions import (
    ExecutionAlreadyFinalizedException,
    ExecutionCancelledException,
    ResourceNotFoundException,
    ValidationException,
)
from app.shared.enums import TriggerType
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


def validate_definition(
    nodes: list[dict], edges: list[dict]
) -> WorkflowGraph:
    """Validate a graph for saving: known node payload types, one trigger, no dangling edges, no cycles.

    Raises:
        WorkflowDefinitionException: On the first violation found.
    """
    return WorkflowGraph.build(nodes, edges, strict=True, require_acyclic=True)


def _validate_trigger_type(trigger_type: str) -> None:
    if trigger_type not in TriggerType.values():
        raise ValidationException(
            f"trigger_type must be one of {', '.join(TriggerType.values())}",
            field="trigger_type",
        )


def _validate_name(name: str) -> None:
    if not name.strip():
        raise ValidationException("name must not be blank", field="name")


class WorkflowManagementService:
    """Organization-scoped management of workflow definitions and their executions."""

    def __init__(
        self,
        workflow_repo: IWorkflowRepository,
        execution_repo: IWorkflowExecutionRepository,
        recorder: ExecutionRecorder,
        coordinator: ExecutionCoordinator,
    ) -> None:
        self._workflow_repo = workflow_repo
        self._execution_repo = execution_repo
        self._recorder = recorder
        self._coordinator = coordinator

    async def list_workflows(self, organization_id: str) -> list[WorkflowEntity]:
        return await self._workflow_repo.list_by_organization(organization_id)

    async def get_workflow(self, workflow_id: str, organization_id: str) -> WorkflowEntity:
        """Return the workflow or raise ResourceNotFoundException."""
        workflow = await self._workflow_repo.get_by_id_and_organization(
            workflow_id, organization_id
        )
        if workflow is None:
            raise ResourceNotFoundException("workflow", workflow_id)
        return workflow

    async def create_workflow(
        self, organization_id: str, data: WorkflowCreate
    ) -> WorkflowEntity:
        """Validate and persist a new definition.

        Raises:
            ValidationException: Blank name or unknown trigger type.
            WorkflowDefinitionException: Invalid graph.
        """
        _validate_name(data.name)
        _validate_trigger_type(data.trigger_type)
        validate_definition(data.nodes, data.edges)
        workflow = await self._workflow_repo.create_workflow(organization_id, data)
        logger.info(
            "Created workflow %s (%s) for organization %s",
            workflow.id,
            workflow.trigger_type,
            organization_id,
        )
        return workflow

    async def update_workflow(
        self, workflow_id: str, organization_id: str, changes: WorkflowChanges
    ) -> WorkflowEntity:
        """Apply a partial update. A new graph is validated as a whole before saving."""
        current = await self.get_workflow(workflow_id, organization_id)
        if changes.name is not None:
            _validate_name(changes.name)
        if changes.trigger_type is not None:
            _validate_trigger_type(changes.trigger_type)
        if changes.touches_graph:
            validate_definition(
                changes.nodes if changes.nodes is not None else current.nodes,
                changes.edges if changes.edges is not None else current.edges,
            )
        updated = await self._workflow_repo.update_workflow(
            workflow_id, organization_id, changes
        )
        if updated is None:
            raise ResourceNotFoundException("workflow", workflow_id)
        return updated

    async def delete_workflow(self, workflow_id: str, organization_id: str) -> None:
        """Delete the workflow after deleting all of its execution records."""
        await self.get_workflow(workflow_id, organization_id)
        removed = await self._execution_repo.delete_by_workflow(workflow_id)
        await self._workflow_repo.delete_workflow(workflow_id, organization_id)
        logger.info(
            "Deleted workflow %s and %d execution record(s)", workflow_id, removed
        )

    async def list_executions(
        self, workflow_id: str, organization_id: str, limit: int = 50
    ) -> list[ExecutionRecord]:
        await self.get_workflow(workflow_id, organization_id)
        return await self._recorder.list_for_workflow(workflow_id, limit=limit)

    async def get_execution(
        self, execution_id: str, organization_id: str
    ) -> ExecutionRecord:
        """Return the record when its workflow belongs to the organization."""
        record = await self._recorder.get(execution_id)
        if record is None:
            raise ResourceNotFoundException("workflow_execution", execution_id)
        workflow = await self._workflow_repo.get_by_id_and_organization(
            record.workflow_id, organization_id
        )
        if workflow is None:
            raise ResourceNotFoundException("workflow_execution", execution_id)
        return record

    async def cancel_execution(
        self, execution_id: str, organization_id: str
    ) -> ExecutionRecord:
        """Request cancellation of a running execution.

        An execution running in this process stops before its next node. A
        RUNNING record with no live walk here (e.g. left over from a restart)
        is failed directly.

        Raises:
            ExecutionAlreadyFinalizedException: If the record is already terminal.
        """
        record = await self.get_execution(execution_id, organization_id)
        if record.is_finished:
            raise ExecutionAlreadyFinalizedException(execution_id)
        if not self._coordinator.cancel(execution_id):
            logger.warning(
                "Execution %s is not running in this process; marking it failed",
                execution_id,
            )
            await self._recorder.fail(
                execution_id, ExecutionCancelledException(execution_id).message
            )
            return await self.get_execution(execution_id, organization_id)
        return record
