"""Event ingestion: the host ticket system reports lifecycle events here."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import get_trigger_dispatcher
from app.application.use_cases.workflows import TriggerDispatcher
from app.core.limiter import limit_events
from app.schemas.workflow import (
    ExecutionSummary,
    WorkflowEventRequest,
    WorkflowEventResponse,
)

router = APIRouter()


@router.post("", response_model=WorkflowEventResponse, status_code=202)
@limit_events
async def ingest_workflow_event(
    request: Request,
    body: WorkflowEventRequest,
    dispatcher: Annotated[TriggerDispatcher, Depends(get_trigger_dispatcher)],
):
    """Run every active workflow of the ticket's organization for this trigger type.

    Workflow failures are recorded on their executions; the call itself
    succeeds. An unknown ticket yields an empty execution list.
    """
    records = await dispatcher.fire(body.ticket_id, body.trigger_type.value)
    return WorkflowEventResponse(
        ticket_id=body.ticket_id,
        trigger_type=body.trigger_type,
        executions=[ExecutionSummary.model_validate(r) for r in records],
    )
