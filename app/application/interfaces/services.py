"""Service interfaces (ports) for the application layer.

Protocols define contracts for outbound services (DIP).
"""

from __future__ import annotations

from typing import Any, Protocol


# Outbound webhook
class IWebhookSender(Protocol):
    """Protocol for delivering one JSON POST to an external URL."""

    async def send(self, url: str, payload: dict[str, Any]) -> int:
        """POST payload as JSON; return the status code. Raises WebhookDeliveryException on non-2xx or transport error."""
