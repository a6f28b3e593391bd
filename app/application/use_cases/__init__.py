"""Application use cases: one entry point per workflow operation."""

from app.application.use_cases.workflows import (
    GraphExecutor,
    TriggerDispatcher,
    WorkflowManagementService,
    validate_definition,
)

__all__ = [
    "GraphExecutor",
    "TriggerDispatcher",
    "WorkflowManagementService",
    "validate_definition",
]
