"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    ITicketStore,
    IWorkflowExecutionRepository,
    IWorkflowRepository,
)
from app.application.interfaces.services import IWebhookSender

__all__ = [
    "ITicketStore",
    "IWebhookSender",
    "IWorkflowExecutionRepository",
    "IWorkflowRepository",
]
