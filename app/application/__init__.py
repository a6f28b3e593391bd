"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, webhook sender).
"""

from app.application.interfaces import (
    ITicketStore,
    IWebhookSender,
    IWorkflowExecutionRepository,
    IWorkflowRepository,
)
from app.application.services import (
    ActionDispatcher,
    ConditionEvaluator,
    ExecutionRecorder,
)
from app.application.use_cases import (
    GraphExecutor,
    TriggerDispatcher,
    WorkflowManagementService,
)

__all__ = [
    "ActionDispatcher",
    "ConditionEvaluator",
    "ExecutionRecorder",
    "GraphExecutor",
    "ITicketStore",
    "IWebhookSender",
    "IWorkflowExecutionRepository",
    "IWorkflowRepository",
    "TriggerDispatcher",
    "WorkflowManagementService",
]
