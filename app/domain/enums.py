"""Ticket-domain enumerations (status, priority, message type).

Values match the host ticket system's stored strings.
"""

from enum import Enum


class TicketStatus(str, Enum):
    """Ticket status values."""

    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    WAITING_ON_CUSTOMER = "WAITING_ON_CUSTOMER"
    ESCALATED = "ESCALATED"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"

    @classmethod
    def values(cls) -> list[str]:
        """Return all status values as strings."""
        return [s.value for s in cls]


class TicketPriority(str, Enum):
    """Ticket priority values."""

    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"
    URGENT = "URGENT"

    @classmethod
    def values(cls) -> list[str]:
        """Return all priority values as strings."""
        return [p.value for p in cls]


class MessageType(str, Enum):
    """Ticket message type. Workflow notes are internal NOTE messages."""

    NOTE = "NOTE"
    REPLY = "REPLY"
