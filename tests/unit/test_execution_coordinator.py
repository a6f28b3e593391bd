"""ExecutionCoordinator: per-ticket serialization and cancellation tokens."""

import asyncio

from app.core.execution_coordinator import ExecutionCoordinator


async def test_ticket_lock_serializes_same_ticket(coordinator) -> None:
    order: list[str] = []

    async def hold(name: str) -> None:
        async with coordinator.ticket_lock("tk1"):
            order.append(f"{name}-in")
            await asyncio.sleep(0.01)
            order.append(f"{name}-out")

    await asyncio.gather(hold("a"), hold("b"))
    assert order == ["a-in", "a-out", "b-in", "b-out"]


async def test_different_tickets_do_not_block(coordinator) -> None:
    async with coordinator.ticket_lock("tk1"):
        async with coordinator.ticket_lock("tk2"):
            assert coordinator.is_ticket_locked("tk1")
            assert coordinator.is_ticket_locked("tk2")


async def test_lock_is_dropped_when_idle(coordinator: ExecutionCoordinator) -> None:
    async with coordinator.ticket_lock("tk1"):
        pass
    assert not coordinator.is_ticket_locked("tk1")
    assert coordinator._locks == {}


def test_cancel_sets_registered_token(coordinator) -> None:
    token = coordinator.register("exec-1")
    assert coordinator.is_running("exec-1")
    assert coordinator.cancel("exec-1") is True
    assert token.is_set()


def test_cancel_unknown_execution_returns_false(coordinator) -> None:
    assert coordinator.cancel("exec-404") is False


def test_release_forgets_token(coordinator) -> None:
    coordinator.register("exec-1")
    coordinator.release("exec-1")
    assert not coordinator.is_running("exec-1")
    assert coordinator.cancel("exec-1") is False
