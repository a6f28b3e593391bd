"""Presentation-layer dependency injection (composition root).

Routes depend only on these dependencies, not on infrastructure directly.
"""

from app.api.v1.dependencies.organization import get_organization_id
from app.api.v1.dependencies.workflow import (
    build_graph_executor,
    get_execution_coordinator,
    get_graph_executor,
    get_trigger_dispatcher,
    get_webhook_client,
    get_workflow_service,
    get_workflow_service_for_write,
)

__all__ = [
    "build_graph_executor",
    "get_execution_coordinator",
    "get_graph_executor",
    "get_organization_id",
    "get_trigger_dispatcher",
    "get_webhook_client",
    "get_workflow_service",
    "get_workflow_service_for_write",
]
