"""Infrastructure exceptions for external operations.

Extend AutomationException so presentation and the execution recorder can
handle them consistently.
"""

from app.domain.exceptions import AutomationException


class ExternalServiceException(AutomationException):
    """Base exception for outbound calls to external services."""


class WebhookDeliveryException(ExternalServiceException):
    """Webhook POST failed: transport error or non-2xx response."""

    def __init__(
        self, url: str, reason: str, status_code: int | None = None
    ) -> None:
        details: dict[str, object] = {"url": url, "reason": reason}
        if status_code is not None:
            details["status_code"] = status_code
        message = (
            f"Webhook delivery to {url} failed with status {status_code}"
            if status_code is not None
            else f"Webhook delivery to {url} failed: {reason}"
        )
        super().__init__(message, "WEBHOOK_DELIVERY_ERROR", details)
