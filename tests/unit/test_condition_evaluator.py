"""ConditionEvaluator against an in-memory ticket store with a fixed clock."""

from datetime import timedelta

import pytest

from app.application.services.condition_evaluator import ConditionEvaluator
from app.domain.value_objects.workflow_nodes import (
    HasTagCondition,
    PriorityCondition,
    StatusCondition,
    TimeElapsedCondition,
    UnknownCondition,
)
from tests.support import TICKET_CREATED_AT, InMemoryTicketStore


def _evaluator(store: InMemoryTicketStore, hours_later: float = 0) -> ConditionEvaluator:
    now = TICKET_CREATED_AT + timedelta(hours=hours_later)
    return ConditionEvaluator(store, clock=lambda: now)


async def test_priority_condition_matches_exact_value(ticket_store) -> None:
    ticket_store.put("tk1", priority="URGENT")
    evaluator = _evaluator(ticket_store)
    assert await evaluator.evaluate(PriorityCondition("URGENT"), "tk1") is True
    assert await evaluator.evaluate(PriorityCondition("HIGH"), "tk1") is False


async def test_status_condition(ticket_store) -> None:
    ticket_store.put("tk1", status="IN_PROGRESS")
    evaluator = _evaluator(ticket_store)
    assert await evaluator.evaluate(StatusCondition("IN_PROGRESS"), "tk1") is True
    assert await evaluator.evaluate(StatusCondition("OPEN"), "tk1") is False


async def test_has_tag_condition(ticket_store) -> None:
    ticket_store.put("tk1")
    ticket_store.tags.add(("tk1", "vip"))
    evaluator = _evaluator(ticket_store)
    assert await evaluator.evaluate(HasTagCondition("vip"), "tk1") is True
    assert await evaluator.evaluate(HasTagCondition("billing"), "tk1") is False


@pytest.mark.parametrize(
    ("hours_later", "expected"),
    [(23.99, False), (24, True), (30, True)],
)
async def test_time_elapsed_boundary(ticket_store, hours_later, expected) -> None:
    ticket_store.put("tk1")
    evaluator = _evaluator(ticket_store, hours_later=hours_later)
    assert await evaluator.evaluate(TimeElapsedCondition(hours=24), "tk1") is expected


async def test_time_elapsed_zero_hours_is_always_met(ticket_store) -> None:
    ticket_store.put("tk1")
    assert await _evaluator(ticket_store).evaluate(TimeElapsedCondition(), "tk1") is True


async def test_missing_ticket_is_not_met(ticket_store) -> None:
    evaluator = _evaluator(ticket_store)
    assert await evaluator.evaluate(PriorityCondition("URGENT"), "missing") is False
    assert await evaluator.evaluate(HasTagCondition("vip"), "missing") is False


async def test_unknown_condition_fails_open(ticket_store) -> None:
    evaluator = _evaluator(ticket_store)
    assert await evaluator.evaluate(UnknownCondition("sentiment"), "missing") is True
