"""Shared enumerations for the automation service.

Cross-cutting enums used by application and infrastructure (workflow graph,
execution lifecycle, trigger points). Ticket-specific enums (status,
priority, message type) live in app.domain.enums.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class NodeKind(_ValuesMixin, str, Enum):
    """Kind of a node in a workflow graph."""

    TRIGGER = "trigger"
    CONDITION = "condition"
    ACTION = "action"


class WorkflowExecutionStatus(_ValuesMixin, str, Enum):
    """Workflow execution lifecycle status. RUNNING moves exactly once to a terminal value."""

    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self is not WorkflowExecutionStatus.RUNNING


class StepPhase(_ValuesMixin, str, Enum):
    """Phase recorded in an execution step log entry."""

    STARTED = "started"
    COMPLETED = "completed"
    CONDITION_NOT_MET = "condition_not_met"


class TriggerType(_ValuesMixin, str, Enum):
    """Ticket lifecycle points at which the host system fires workflows."""

    TICKET_CREATED = "ticket_created"
    TICKET_UPDATED = "ticket_updated"
    STATUS_CHANGED = "status_changed"
    PRIORITY_CHANGED = "priority_changed"
    TICKET_ASSIGNED = "ticket_assigned"
    MESSAGE_ADDED = "message_added"
    SLA_BREACHED = "sla_breached"
