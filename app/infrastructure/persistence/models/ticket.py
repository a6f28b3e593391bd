"""Ticket, TicketTag and TicketMessage ORM models.

These tables belong to the host help-desk system; only the columns that
workflows read or write are mapped here.
"""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import MessageType, TicketPriority, TicketStatus
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    CuidMixin,
    OrganizationModel,
)


class Ticket(OrganizationModel, Base):
    """Support ticket. Table: ticket."""

    __tablename__ = "ticket"

    subject: Mapped[str] = mapped_column(String, nullable=False, default="")
    status: Mapped[str] = mapped_column(
        String, nullable=False, default=TicketStatus.OPEN.value, index=True
    )
    priority: Mapped[str] = mapped_column(
        String, nullable=False, default=TicketPriority.NORMAL.value
    )
    assignee_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    escalated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    escalated_reason: Mapped[str | None] = mapped_column(Text, nullable=True)


class TicketTag(CreatedAtMixin, Base):
    """Ticket-to-tag association. Table: ticket_tag. One row per (ticket, tag)."""

    __tablename__ = "ticket_tag"

    ticket_id: Mapped[str] = mapped_column(
        String, ForeignKey("ticket.id", ondelete="CASCADE"), primary_key=True
    )
    tag_id: Mapped[str] = mapped_column(String, primary_key=True)


class TicketMessage(CuidMixin, CreatedAtMixin, Base):
    """Message on a ticket (customer reply or internal note). Table: ticket_message."""

    __tablename__ = "ticket_message"

    ticket_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("ticket.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id: Mapped[str] = mapped_column(String, nullable=False)
    type: Mapped[str] = mapped_column(
        String, nullable=False, default=MessageType.NOTE.value
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
