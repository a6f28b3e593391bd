"""Domain layer: entities, value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import (
    ExecutionRecord,
    StepEntry,
    WorkflowEntity,
    WorkflowGraph,
)
from app.domain.enums import MessageType, TicketPriority, TicketStatus
from app.domain.exceptions import (
    ActionTimeoutException,
    AutomationException,
    ExecutionAlreadyFinalizedException,
    ExecutionCancelledException,
    ResourceNotFoundException,
    ValidationException,
    WorkflowDefinitionException,
)

__all__ = [
    # Entities
    "ExecutionRecord",
    "StepEntry",
    "WorkflowEntity",
    "WorkflowGraph",
    # Enums
    "MessageType",
    "TicketPriority",
    "TicketStatus",
    # Exceptions
    "ActionTimeoutException",
    "AutomationException",
    "ExecutionAlreadyFinalizedException",
    "ExecutionCancelledException",
    "ResourceNotFoundException",
    "ValidationException",
    "WorkflowDefinitionException",
]
