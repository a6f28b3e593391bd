"""Workflow use cases: graph execution, trigger dispatch, definition management."""

from app.application.use_cases.workflows.dispatch_trigger import TriggerDispatcher
from app.application.use_cases.workflows.execute_workflow import GraphExecutor
from app.application.use_cases.workflows.manage_workflows import (
    WorkflowManagementService,
    validate_definition,
)

__all__ = [
    "GraphExecutor",
    "TriggerDispatcher",
    "WorkflowManagementService",
    "validate_definition",
]
