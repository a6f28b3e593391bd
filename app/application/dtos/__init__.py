"""Application DTOs (no ORM dependency)."""

from app.application.dtos.ticket import TicketFieldUpdate, TicketResult
from app.application.dtos.workflow import WorkflowChanges, WorkflowCreate

__all__ = [
    "TicketFieldUpdate",
    "TicketResult",
    "WorkflowChanges",
    "WorkflowCreate",
]
