"""In-process coordination of running workflow executions.

Serializes executions per ticket and holds the cancellation token of each
running execution. Lives on app.state; scope is one process.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class ExecutionCoordinator:
    """Per-ticket locks and per-execution cancellation tokens."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._holders: dict[str, int] = {}
        self._tokens: dict[str, asyncio.Event] = {}

    @asynccontextmanager
    async def ticket_lock(self, ticket_id: str) -> AsyncIterator[None]:
        """Hold the ticket's lock for the duration of the block.

        The lock is dropped once no task holds or waits for it.
        """
        lock = self._locks.get(ticket_id)
        if lock is None:
            lock = self._locks[ticket_id] = asyncio.Lock()
        self._holders[ticket_id] = self._holders.get(ticket_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._holders[ticket_id] -= 1
            if self._holders[ticket_id] == 0:
                del self._holders[ticket_id]
                del self._locks[ticket_id]

    def is_ticket_locked(self, ticket_id: str) -> bool:
        lock = self._locks.get(ticket_id)
        return lock is not None and lock.locked()

    def register(self, execution_id: str) -> asyncio.Event:
        """Create and return the cancellation token for a starting execution."""
        token = asyncio.Event()
        self._tokens[execution_id] = token
        return token

    def release(self, execution_id: str) -> None:
        """Forget the token of a finished execution."""
        self._tokens.pop(execution_id, None)

    def is_running(self, execution_id: str) -> bool:
        return execution_id in self._tokens

    def cancel(self, execution_id: str) -> bool:
        """Set the execution's token. Return False when it is not running in this process."""
        token = self._tokens.get(execution_id)
        if token is None:
            return False
        token.set()
        logger.info("Cancellation requested for execution %s", execution_id)
        return True
