"""Condition evaluation: read-only predicates over live ticket state."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

from app.application.interfaces.repositories import ITicketStore
from app.domain.value_objects.workflow_nodes import (
    ConditionSpec,
    HasTagCondition,
    PriorityCondition,
    StatusCondition,
    TimeElapsedCondition,
    UnknownCondition,
)
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import hours_between, utc_now

logger = get_logger(__name__)


class ConditionEvaluator:
    """Evaluates a typed condition against one ticket.

    A missing ticket evaluates to False so the branch halts. Unknown
    condition types evaluate to True (fail open) and are logged.
    """

    def __init__(
        self,
        ticket_store: ITicketStore,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.ticket_store = ticket_store
        self._clock = clock

    async def evaluate(self, condition: ConditionSpec, ticket_id: str) -> bool:
        """Return whether the condition holds for the ticket right now."""
        if isinstance(condition, UnknownCondition):
            logger.warning(
                "Unknown condition type '%s' on ticket %s; treating as met",
                condition.condition_type,
                ticket_id,
            )
            return True

        if isinstance(condition, HasTagCondition):
            # A missing ticket has no associations, so this is False as well.
            return await self.ticket_store.has_tag(ticket_id, condition.tag_id)

        ticket = await self.ticket_store.get_ticket(ticket_id)
        if ticket is None:
            logger.info("Ticket %s not found; condition not met", ticket_id)
            return False

        if isinstance(condition, PriorityCondition):
            return ticket.priority == condition.value
        if isinstance(condition, StatusCondition):
            return ticket.status == condition.value
        if isinstance(condition, TimeElapsedCondition):
            return hours_between(ticket.created_at, self._clock()) >= condition.hours

        logger.warning("Unhandled condition %r; treating as met", condition)
        return True
