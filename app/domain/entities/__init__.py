"""Domain entities and aggregates.

Pure domain models; no ORM or persistence concerns.
"""

from app.domain.entities.execution import ExecutionRecord, StepEntry
from app.domain.entities.workflow import WorkflowEntity, WorkflowGraph

__all__ = [
    "ExecutionRecord",
    "StepEntry",
    "WorkflowEntity",
    "WorkflowGraph",
]
