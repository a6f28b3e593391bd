"""Outbound webhooks: HTTP delivery for the send_webhook action."""

from app.infrastructure.external.webhook.http_sender import HttpWebhookSender

__all__ = ["HttpWebhookSender"]
