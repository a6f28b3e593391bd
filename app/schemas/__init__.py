"""API request/response schemas (pydantic)."""

from app.schemas.health import HealthResponse, ReadinessErrorResponse, ReadinessResponse
from app.schemas.workflow import (
    ExecuteWorkflowRequest,
    ExecutionSummary,
    StepEntryResponse,
    WorkflowCreateRequest,
    WorkflowEdgeSchema,
    WorkflowEventRequest,
    WorkflowEventResponse,
    WorkflowExecutionResponse,
    WorkflowNodeSchema,
    WorkflowResponse,
    WorkflowUpdate,
)

__all__ = [
    "ExecuteWorkflowRequest",
    "ExecutionSummary",
    "HealthResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "StepEntryResponse",
    "WorkflowCreateRequest",
    "WorkflowEdgeSchema",
    "WorkflowEventRequest",
    "WorkflowEventResponse",
    "WorkflowExecutionResponse",
    "WorkflowNodeSchema",
    "WorkflowResponse",
    "WorkflowUpdate",
]
