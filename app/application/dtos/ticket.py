"""DTOs for ticket state as seen by workflows (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TicketResult:
    """Ticket read-model used by condition evaluation and trigger dispatch."""

    id: str
    organization_id: str
    status: str
    priority: str
    assignee_id: str | None
    escalated_at: datetime | None
    escalated_reason: str | None
    created_at: datetime


@dataclass(frozen=True)
class TicketFieldUpdate:
    """Partial ticket update. Only fields that are set (not None) are written."""

    status: str | None = None
    priority: str | None = None
    assignee_id: str | None = None
    escalated_at: datetime | None = None
    escalated_reason: str | None = None

    def as_values(self) -> dict[str, object]:
        """Return the set fields as a column -> value mapping."""
        return {
            key: value
            for key, value in (
                ("status", self.status),
                ("priority", self.priority),
                ("assignee_id", self.assignee_id),
                ("escalated_at", self.escalated_at),
                ("escalated_reason", self.escalated_reason),
            )
            if value is not None
        }
