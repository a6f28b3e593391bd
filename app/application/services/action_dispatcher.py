"""Action dispatch: side-effecting handlers keyed by action type."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from app.application.dtos.ticket import TicketFieldUpdate
from app.application.interfaces.repositories import ITicketStore
from app.application.interfaces.services import IWebhookSender
from app.domain.enums import TicketStatus
from app.domain.value_objects.workflow_nodes import (
    ActionSpec,
    AddNoteAction,
    AddTagAction,
    AssignAgentAction,
    EscalateAction,
    SendWebhookAction,
    UnknownAction,
    UpdatePriorityAction,
    UpdateStatusAction,
)
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class ActionDispatcher:
    """Performs one typed action against one ticket.

    Handler errors (missing ticket, webhook failure) propagate to the
    executor, which fails the execution. Unknown action types are skipped.
    """

    def __init__(
        self,
        ticket_store: ITicketStore,
        webhook_sender: IWebhookSender,
        *,
        system_author_id: str = "system",
        escalation_reason: str = "Workflow escalation",
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.ticket_store = ticket_store
        self.webhook_sender = webhook_sender
        self._system_author_id = system_author_id
        self._escalation_reason = escalation_reason
        self._clock = clock

    async def perform(self, action: ActionSpec, ticket_id: str) -> None:
        """Apply the action to the ticket. May raise."""
        if isinstance(action, UpdateStatusAction):
            await self.ticket_store.update_fields(
                ticket_id, TicketFieldUpdate(status=action.status)
            )
        elif isinstance(action, UpdatePriorityAction):
            await self.ticket_store.update_fields(
                ticket_id, TicketFieldUpdate(priority=action.priority)
            )
        elif isinstance(action, AddTagAction):
            created = await self.ticket_store.add_tag(ticket_id, action.tag_id)
            if not created:
                logger.debug("Ticket %s already tagged %s", ticket_id, action.tag_id)
        elif isinstance(action, AssignAgentAction):
            await self.ticket_store.update_fields(
                ticket_id, TicketFieldUpdate(assignee_id=action.agent_id)
            )
        elif isinstance(action, AddNoteAction):
            await self.ticket_store.add_note(
                ticket_id,
                action.author_id or self._system_author_id,
                action.note_content,
            )
        elif isinstance(action, EscalateAction):
            await self.ticket_store.update_fields(
                ticket_id,
                TicketFieldUpdate(
                    status=TicketStatus.ESCALATED.value,
                    escalated_at=self._clock(),
                    escalated_reason=action.reason or self._escalation_reason,
                ),
            )
        elif isinstance(action, SendWebhookAction):
            await self.webhook_sender.send(
                action.webhook_url,
                {"ticketId": ticket_id, "data": action.webhook_data},
            )
        elif isinstance(action, UnknownAction):
            logger.warning(
                "Unknown action type '%s' on ticket %s; skipped",
                action.action_type,
                ticket_id,
            )
        else:
            logger.warning("Unhandled action %r on ticket %s; skipped", action, ticket_id)
