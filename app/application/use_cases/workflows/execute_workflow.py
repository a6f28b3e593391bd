"""Graph executor: walk one workflow graph against one ticket and record every step."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from app.application.interfaces.repositories import ITicketStore, IWorkflowRepository
from app.application.services.action_dispatcher import ActionDispatcher
from app.application.services.condition_evaluator import ConditionEvaluator
from app.application.services.execution_recorder import ExecutionRecorder
from app.core.execution_coordinator import ExecutionCoordinator
from app.domain.entities.execution import ExecutionRecord
from app.domain.entities.workflow import WorkflowEntity, WorkflowGraph
from app.domain.exceptions import (
    ActionTimeoutException,
    AutomationException,
    ExecutionAlreadyFinalizedException,
    ExecutionCancelledException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects.workflow_nodes import (
    IDEMPOTENT_ACTIONS,
    ActionNode,
    ActionSpec,
    ConditionNode,
    WorkflowNode,
)
from app.shared.enums import StepPhase
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, add_span_event, traced
from app.shared.utils.retry import compute_backoff

logger = get_logger(__name__)


class GraphExecutor:
    """Runs a workflow against a ticket: depth-first from the trigger node.

    Each node is logged as started, then completed or condition_not_met. A
    false condition stops its branch; sibling branches still run. Outgoing
    edges are followed in definition order and a node is visited at most
    once per execution. Any handler exception fails the execution; side
    effects already applied stay applied.
    """

    def __init__(
        self,
        workflow_repo: IWorkflowRepository,
        ticket_store: ITicketStore,
        recorder: ExecutionRecorder,
        evaluator: ConditionEvaluator,
        dispatcher: ActionDispatcher,
        coordinator: ExecutionCoordinator,
        *,
        action_timeout_seconds: float = 30.0,
        max_retries: int = 2,
        retry_backoff_base: float = 1.5,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self._workflow_repo = workflow_repo
        self._ticket_store = ticket_store
        self._recorder = recorder
        self._evaluator = evaluator
        self._dispatcher = dispatcher
        self._coordinator = coordinator
        self._action_timeout_seconds = action_timeout_seconds
        self._max_retries = max_retries
        self._retry_backoff_base = retry_backoff_base
        self._sleep = sleep

    async def execute(
        self, workflow_id: str, ticket_id: str, *, bypass_active: bool = True
    ) -> ExecutionRecord:
        """Load the workflow and run it against the ticket.

        bypass_active=True (manual execution) runs inactive workflows too; the
        override is logged. With bypass_active=False an inactive workflow
        raises ValidationException.

        Raises:
            ResourceNotFoundException: If the workflow does not exist, or the
                ticket does not exist in the workflow's organization.
        """
        workflow = await self._workflow_repo.get_by_id(workflow_id)
        if workflow is None:
            raise ResourceNotFoundException("workflow", workflow_id)
        ticket = await self._ticket_store.get_ticket(ticket_id)
        if ticket is None or not workflow.belongs_to_organization(ticket.organization_id):
            raise ResourceNotFoundException("ticket", ticket_id)
        if not workflow.active:
            if not bypass_active:
                raise ValidationException(
                    f"Workflow {workflow_id} is not active", field="active"
                )
            logger.info(
                "Manual execution of inactive workflow %s on ticket %s (active flag bypassed)",
                workflow_id,
                ticket_id,
            )
        return await self.run(workflow, ticket_id)

    @traced("workflow.execute")
    async def run(self, workflow: WorkflowEntity, ticket_id: str) -> ExecutionRecord:
        """Run an already loaded workflow under the ticket's lock and return its final record."""
        async with self._coordinator.ticket_lock(ticket_id):
            execution_id = await self._recorder.begin(workflow.id, ticket_id)
            add_span_attributes(
                workflow_id=workflow.id, ticket_id=ticket_id, execution_id=execution_id
            )
            token = self._coordinator.register(execution_id)
            try:
                await self._walk(workflow, ticket_id, execution_id, token)
            except asyncio.CancelledError:
                # Fail the record before the cancellation propagates.
                logger.warning(
                    "Execution %s of workflow %s on ticket %s interrupted",
                    execution_id,
                    workflow.id,
                    ticket_id,
                )
                await asyncio.shield(
                    self._finish(execution_id, ExecutionCancelledException(execution_id).message)
                )
                raise
            except AutomationException as e:
                logger.warning(
                    "Execution %s of workflow %s on ticket %s failed: %s",
                    execution_id,
                    workflow.id,
                    ticket_id,
                    e.message,
                )
                await self._finish(execution_id, e.message)
            except Exception as e:
                logger.exception(
                    "Execution %s of workflow %s on ticket %s failed",
                    execution_id,
                    workflow.id,
                    ticket_id,
                )
                await self._finish(execution_id, str(e) or e.__class__.__name__)
            else:
                await self._finish(execution_id)
            finally:
                self._coordinator.release(execution_id)

        record = await self._recorder.get(execution_id)
        if record is None:
            raise ResourceNotFoundException("workflow_execution", execution_id)
        return record

    async def _finish(self, execution_id: str, error: str | None = None) -> None:
        """Complete (error is None) or fail the record; an outcome stored elsewhere wins."""
        try:
            if error is None:
                await self._recorder.complete(execution_id)
            else:
                await self._recorder.fail(execution_id, error)
        except ExecutionAlreadyFinalizedException:
            logger.warning(
                "Execution %s was finalized elsewhere; keeping the stored outcome",
                execution_id,
            )

    async def _walk(
        self,
        workflow: WorkflowEntity,
        ticket_id: str,
        execution_id: str,
        token: asyncio.Event,
    ) -> None:
        graph: WorkflowGraph = workflow.graph()
        visited: set[str] = set()
        # Explicit stack; successors pushed in reverse so definition order is kept.
        stack: list[WorkflowNode] = [graph.trigger]
        while stack:
            node = stack.pop()
            if node.id in visited:
                continue
            if token.is_set():
                raise ExecutionCancelledException(execution_id)
            visited.add(node.id)
            if await self._visit(node, ticket_id, execution_id, token):
                stack.extend(reversed(graph.successors(node.id)))

    async def _visit(
        self,
        node: WorkflowNode,
        ticket_id: str,
        execution_id: str,
        token: asyncio.Event,
    ) -> bool:
        """Execute one node. Return False when the branch stops here."""
        await self._recorder.append_step(execution_id, node.id, node.kind, StepPhase.STARTED)

        if isinstance(node, ConditionNode):
            if not await self._evaluator.evaluate(node.condition, ticket_id):
                await self._recorder.append_step(
                    execution_id, node.id, node.kind, StepPhase.CONDITION_NOT_MET
                )
                add_span_event("workflow.condition_not_met", {"node_id": node.id})
                return False
        elif isinstance(node, ActionNode):
            await self._perform_with_timeout(node.action, ticket_id, execution_id, token)

        await self._recorder.append_step(execution_id, node.id, node.kind, StepPhase.COMPLETED)
        return True

    async def _perform_with_timeout(
        self,
        action: ActionSpec,
        ticket_id: str,
        execution_id: str,
        token: asyncio.Event,
    ) -> None:
        """Perform the action under the action deadline; retry idempotent actions on timeout."""
        retries = self._max_retries if type(action) in IDEMPOTENT_ACTIONS else 0
        attempt = 0
        while True:
            try:
                await asyncio.wait_for(
                    self._dispatcher.perform(action, ticket_id),
                    timeout=self._action_timeout_seconds,
                )
                return
            except TimeoutError:
                if attempt >= retries:
                    raise ActionTimeoutException(
                        action.action_type, self._action_timeout_seconds
                    ) from None
            delay = compute_backoff(attempt, base=self._retry_backoff_base)
            attempt += 1
            logger.warning(
                "Action %s on ticket %s timed out; retry %d/%d in %.2fs",
                action.action_type,
                ticket_id,
                attempt,
                retries,
                delay,
            )
            await self._sleep(delay)
            if token.is_set():
                raise ExecutionCancelledException(execution_id)
