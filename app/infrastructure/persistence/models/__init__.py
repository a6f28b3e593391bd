"""Persistence models: ORM entities and mixins.

Importing this package registers every table on Base.metadata (Alembic
autogenerate and test create_all rely on it).
"""

from app.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    OrganizationMixin,
    OrganizationModel,
    TimestampMixin,
)
from app.infrastructure.persistence.models.ticket import Ticket, TicketMessage, TicketTag
from app.infrastructure.persistence.models.workflow import Workflow, WorkflowExecution

__all__ = [
    "CreatedAtMixin",
    "CuidMixin",
    "OrganizationMixin",
    "OrganizationModel",
    "Ticket",
    "TicketMessage",
    "TicketTag",
    "TimestampMixin",
    "Workflow",
    "WorkflowExecution",
]
