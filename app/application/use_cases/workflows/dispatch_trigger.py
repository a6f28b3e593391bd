"""Trigger dispatch: run every active workflow that listens for a ticket event."""

from __future__ import annotations

from app.application.interfaces.repositories import ITicketStore, IWorkflowRepository
from app.application.use_cases.workflows.execute_workflow import GraphExecutor
from app.domain.entities.execution import ExecutionRecord
from app.shared.telemetry.logging import get_logger
from app.shared.telemetry.tracing import add_span_attributes, traced

logger = get_logger(__name__)


class TriggerDispatcher:
    """Selects the active workflows of the ticket's organization for a trigger type and runs them in order."""

    def __init__(
        self,
        ticket_store: ITicketStore,
        workflow_repo: IWorkflowRepository,
        executor: GraphExecutor,
    ) -> None:
        self._ticket_store = ticket_store
        self._workflow_repo = workflow_repo
        self._executor = executor

    @traced("workflow.fire")
    async def fire(self, ticket_id: str, trigger_type: str) -> list[ExecutionRecord]:
        """Run matching workflows sequentially (creation order) and return their records.

        An unknown ticket is logged and nothing runs. Failures inside a
        workflow are recorded on its execution and do not stop the others.
        """
        ticket = await self._ticket_store.get_ticket(ticket_id)
        if ticket is None:
            logger.warning(
                "Trigger %s fired for unknown ticket %s; no workflows run",
                trigger_type,
                ticket_id,
            )
            return []

        workflows = await self._workflow_repo.list_active_by_trigger(
            ticket.organization_id, trigger_type
        )
        add_span_attributes(
            ticket_id=ticket_id,
            trigger_type=trigger_type,
            workflow_count=len(workflows),
        )
        logger.info(
            "Trigger %s on ticket %s matched %d workflow(s)",
            trigger_type,
            ticket_id,
            len(workflows),
        )
        records: list[ExecutionRecord] = []
        for workflow in workflows:
            records.append(await self._executor.run(workflow, ticket_id))
        return records
