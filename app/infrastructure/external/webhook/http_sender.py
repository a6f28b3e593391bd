"""Outbound webhook delivery over HTTP (send_webhook action)."""

from __future__ import annotations

from typing import Any

import httpx

from app.infrastructure.exceptions import WebhookDeliveryException
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


class HttpWebhookSender:
    """Posts a JSON body once to the target URL. Implements IWebhookSender.

    No authentication header and no signature are added. Delivery is at most
    once per call; retries are the caller's decision.
    """

    def __init__(self, client: httpx.AsyncClient, *, user_agent: str | None = None) -> None:
        self._client = client
        self._headers = {"User-Agent": user_agent} if user_agent else {}

    async def send(self, url: str, payload: dict[str, Any]) -> int:
        """POST payload as JSON and return the response status code.

        Raises:
            WebhookDeliveryException: On a non-2xx response or a transport error
                (connection failure, client timeout).
        """
        try:
            response = await self._client.post(url, json=payload, headers=self._headers)
        except httpx.HTTPError as e:
            logger.error("Webhook POST to %s failed: %s", url, e)
            raise WebhookDeliveryException(url, str(e) or e.__class__.__name__) from e
        if not response.is_success:
            logger.error("Webhook POST to %s failed: status=%d", url, response.status_code)
            raise WebhookDeliveryException(
                url, response.reason_phrase, status_code=response.status_code
            )
        logger.info("Webhook delivered to %s: status=%d", url, response.status_code)
        return response.status_code
