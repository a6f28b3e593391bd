"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.ticket_repo import TicketRepository
from app.infrastructure.persistence.repositories.workflow_execution_repo import (
    WorkflowExecutionRepository,
)
from app.infrastructure.persistence.repositories.workflow_repo import WorkflowRepository

__all__ = [
    "BaseRepository",
    "TicketRepository",
    "WorkflowExecutionRepository",
    "WorkflowRepository",
]
