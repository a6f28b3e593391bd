"""Workflow API schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from app.shared.enums import NodeKind, StepPhase, TriggerType, WorkflowExecutionStatus


class WorkflowNodeSchema(BaseModel):
    """Editor node: {id, type, data, position?}. data keys may be camelCase or snake_case."""

    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1, max_length=128)
    type: Literal["trigger", "condition", "action"]
    data: dict[str, Any] = Field(default_factory=dict)
    position: dict[str, float] | None = None


class WorkflowEdgeSchema(BaseModel):
    """Editor edge. Accepts sourceHandle/targetHandle as sent by the canvas."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: str = Field(..., min_length=1, max_length=128)
    source: str = Field(..., min_length=1)
    target: str = Field(..., min_length=1)
    label: str | None = None
    source_handle: str | None = Field(default=None, alias="sourceHandle")
    target_handle: str | None = Field(default=None, alias="targetHandle")


class WorkflowCreateRequest(BaseModel):
    """Request body for creating a workflow."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    trigger_type: TriggerType
    nodes: list[WorkflowNodeSchema] = Field(..., min_length=1)
    edges: list[WorkflowEdgeSchema] = Field(default_factory=list)
    active: bool = True


class WorkflowUpdate(BaseModel):
    """Request body for updating a workflow (partial). nodes/edges replace the stored graph."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    trigger_type: TriggerType | None = None
    nodes: list[WorkflowNodeSchema] | None = None
    edges: list[WorkflowEdgeSchema] | None = None
    active: bool | None = None


class WorkflowResponse(BaseModel):
    """Workflow response."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    organization_id: str
    name: str
    description: str | None
    trigger_type: str
    nodes: list[dict[str, Any]]
    edges: list[dict[str, Any]]
    active: bool
    created_at: datetime | None
    updated_at: datetime | None


class StepEntryResponse(BaseModel):
    """One step log entry."""

    model_config = ConfigDict(from_attributes=True)

    node_id: str
    node_kind: NodeKind
    phase: StepPhase
    timestamp: datetime


class WorkflowExecutionResponse(BaseModel):
    """Workflow execution response with its full step log."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    workflow_id: str
    ticket_id: str
    status: WorkflowExecutionStatus
    started_at: datetime
    completed_at: datetime | None
    step_log: list[StepEntryResponse]
    error_message: str | None


class ExecutionSummary(BaseModel):
    """Short form of an execution, returned by event ingestion."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    workflow_id: str
    status: WorkflowExecutionStatus
    error_message: str | None


class ExecuteWorkflowRequest(BaseModel):
    """Request body for a manual execution."""

    ticket_id: str = Field(..., min_length=1, max_length=128)


class WorkflowEventRequest(BaseModel):
    """Ticket lifecycle event reported by the host system."""

    ticket_id: str = Field(..., min_length=1, max_length=128)
    trigger_type: TriggerType


class WorkflowEventResponse(BaseModel):
    """Result of dispatching one event: one summary per workflow that ran."""

    ticket_id: str
    trigger_type: TriggerType
    executions: list[ExecutionSummary]
