"""Workflow API: thin routes delegating to WorkflowManagementService and GraphExecutor."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from app.api.v1.dependencies import (
    get_graph_executor,
    get_organization_id,
    get_workflow_service,
    get_workflow_service_for_write,
)
from app.application.dtos.workflow import WorkflowChanges, WorkflowCreate
from app.application.use_cases.workflows import GraphExecutor, WorkflowManagementService
from app.core.limiter import limit_execute, limit_writes
from app.schemas.workflow import (
    ExecuteWorkflowRequest,
    WorkflowCreateRequest,
    WorkflowExecutionResponse,
    WorkflowResponse,
    WorkflowUpdate,
)
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=list[WorkflowResponse])
async def list_workflows(
    organization_id: Annotated[str, Depends(get_organization_id)],
    service: Annotated[WorkflowManagementService, Depends(get_workflow_service)],
):
    """List the organization's workflows, newest first."""
    workflows = await service.list_workflows(organization_id)
    return [WorkflowResponse.model_validate(w) for w in workflows]


@router.post("", response_model=WorkflowResponse, status_code=201)
@limit_writes
async def create_workflow(
    request: Request,
    body: WorkflowCreateRequest,
    organization_id: Annotated[str, Depends(get_organization_id)],
    service: Annotated[WorkflowManagementService, Depends(get_workflow_service_for_write)],
):
    """Create a workflow. The graph is validated (one trigger, known types, no dangling edges, no cycles)."""
    workflow = await service.create_workflow(
        organization_id,
        WorkflowCreate(
            name=body.name,
            description=body.description,
            trigger_type=body.trigger_type.value,
            nodes=[n.model_dump(exclude_none=True) for n in body.nodes],
            edges=[e.model_dump(by_alias=True, exclude_none=True) for e in body.edges],
            active=body.active,
        ),
    )
    return WorkflowResponse.model_validate(workflow)


@router.get(
    "/executions/{execution_id}",
    response_model=WorkflowExecutionResponse,
)
async def get_execution(
    execution_id: str,
    organization_id: Annotated[str, Depends(get_organization_id)],
    service: Annotated[WorkflowManagementService, Depends(get_workflow_service)],
):
    """Get workflow execution by id, with its step log."""
    record = await service.get_execution(execution_id, organization_id)
    return WorkflowExecutionResponse.model_validate(record)


@router.post(
    "/executions/{execution_id}/cancel",
    response_model=WorkflowExecutionResponse,
    status_code=202,
)
@limit_writes
async def cancel_execution(
    request: Request,
    execution_id: str,
    organization_id: Annotated[str, Depends(get_organization_id)],
    service: Annotated[WorkflowManagementService, Depends(get_workflow_service_for_write)],
):
    """Request cancellation. A running walk stops before its next node; 409 if already finished."""
    record = await service.cancel_execution(execution_id, organization_id)
    return WorkflowExecutionResponse.model_validate(record)


@router.get("/{workflow_id}", response_model=WorkflowResponse)
async def get_workflow(
    workflow_id: str,
    organization_id: Annotated[str, Depends(get_organization_id)],
    service: Annotated[WorkflowManagementService, Depends(get_workflow_service)],
):
    """Get workflow by id (organization-scoped)."""
    workflow = await service.get_workflow(workflow_id, organization_id)
    return WorkflowResponse.model_validate(workflow)


@router.put("/{workflow_id}", response_model=WorkflowResponse)
@limit_writes
async def update_workflow(
    request: Request,
    workflow_id: str,
    body: WorkflowUpdate,
    organization_id: Annotated[str, Depends(get_organization_id)],
    service: Annotated[WorkflowManagementService, Depends(get_workflow_service_for_write)],
):
    """Partially update a workflow. nodes and edges, when given, replace the stored graph."""
    workflow = await service.update_workflow(
        workflow_id,
        organization_id,
        WorkflowChanges(
            name=body.name,
            description=body.description,
            trigger_type=body.trigger_type.value if body.trigger_type else None,
            nodes=(
                [n.model_dump(exclude_none=True) for n in body.nodes]
                if body.nodes is not None
                else None
            ),
            edges=(
                [e.model_dump(by_alias=True, exclude_none=True) for e in body.edges]
                if body.edges is not None
                else None
            ),
            active=body.active,
        ),
    )
    return WorkflowResponse.model_validate(workflow)


@router.delete("/{workflow_id}", status_code=204)
@limit_writes
async def delete_workflow(
    request: Request,
    workflow_id: str,
    organization_id: Annotated[str, Depends(get_organization_id)],
    service: Annotated[WorkflowManagementService, Depends(get_workflow_service_for_write)],
) -> Response:
    """Delete a workflow and all of its execution records."""
    await service.delete_workflow(workflow_id, organization_id)
    return Response(status_code=204)


@router.post("/{workflow_id}/execute", response_model=WorkflowExecutionResponse)
@limit_execute
async def execute_workflow(
    request: Request,
    workflow_id: str,
    body: ExecuteWorkflowRequest,
    organization_id: Annotated[str, Depends(get_organization_id)],
    service: Annotated[WorkflowManagementService, Depends(get_workflow_service)],
    executor: Annotated[GraphExecutor, Depends(get_graph_executor)],
):
    """Run the workflow against a ticket now, even when the workflow is inactive.

    Returns the finished execution record; a failed run is a 200 with status "failed".
    """
    await service.get_workflow(workflow_id, organization_id)
    logger.info(
        "Manual execution requested: workflow=%s ticket=%s organization=%s",
        workflow_id,
        body.ticket_id,
        organization_id,
    )
    record = await executor.execute(workflow_id, body.ticket_id, bypass_active=True)
    return WorkflowExecutionResponse.model_validate(record)


@router.get(
    "/{workflow_id}/executions",
    response_model=list[WorkflowExecutionResponse],
)
async def get_workflow_executions(
    workflow_id: str,
    organization_id: Annotated[str, Depends(get_organization_id)],
    service: Annotated[WorkflowManagementService, Depends(get_workflow_service)],
    limit: int = Query(50, ge=1, le=500),
):
    """Get execution history for a workflow, most recent first."""
    records = await service.list_executions(workflow_id, organization_id, limit=limit)
    return [WorkflowExecutionResponse.model_validate(r) for r in records]
