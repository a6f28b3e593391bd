"""SQL ticket store: the slice of the host ticket tables that workflows read and write."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.ticket import TicketFieldUpdate, TicketResult
from app.domain.enums import MessageType
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.models.ticket import Ticket, TicketMessage, TicketTag
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc


def _to_result(t: Ticket) -> TicketResult:
    """Map Ticket ORM to TicketResult DTO."""
    return TicketResult(
        id=t.id,
        organization_id=t.organization_id,
        status=t.status,
        priority=t.priority,
        assignee_id=t.assignee_id,
        escalated_at=ensure_utc(t.escalated_at),
        escalated_reason=t.escalated_reason,
        created_at=ensure_utc(t.created_at),
    )


class TicketRepository(BaseRepository[Ticket]):
    """Ticket store. Implements ITicketStore.

    Writes commit immediately by default (see BaseRepository).
    """

    def __init__(self, db: AsyncSession, *, autocommit: bool = True) -> None:
        super().__init__(db, Ticket, autocommit=autocommit)

    async def get_ticket(self, ticket_id: str) -> TicketResult | None:
        ticket = await self.get_model(ticket_id)
        return _to_result(ticket) if ticket else None

    async def has_tag(self, ticket_id: str, tag_id: str) -> bool:
        result = await self.db.execute(
            select(TicketTag.ticket_id).where(
                TicketTag.ticket_id == ticket_id,
                TicketTag.tag_id == tag_id,
            )
        )
        return result.first() is not None

    async def add_tag(self, ticket_id: str, tag_id: str) -> bool:
        """Create the (ticket, tag) association; False when it already exists."""
        await self._require_ticket(ticket_id)
        if await self.has_tag(ticket_id, tag_id):
            return False
        self.db.add(TicketTag(ticket_id=ticket_id, tag_id=tag_id))
        await self._save()
        return True

    async def update_fields(self, ticket_id: str, update: TicketFieldUpdate) -> None:
        ticket = await self._require_ticket(ticket_id)
        values = update.as_values()
        if not values:
            return
        for column, value in values.items():
            setattr(ticket, column, value)
        await self._save()

    async def add_note(self, ticket_id: str, author_id: str, content: str) -> str:
        """Create an internal NOTE message and return its id."""
        await self._require_ticket(ticket_id)
        message = TicketMessage(
            ticket_id=ticket_id,
            author_id=author_id,
            type=MessageType.NOTE.value,
            content=content,
        )
        self.db.add(message)
        await self._save()
        return message.id

    async def _require_ticket(self, ticket_id: str) -> Ticket:
        ticket = await self.get_model(ticket_id)
        if ticket is None:
            raise ResourceNotFoundException("ticket", ticket_id)
        return ticket
