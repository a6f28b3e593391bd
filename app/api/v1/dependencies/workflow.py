"""Workflow dependencies (composition root).

Management endpoints get repositories that only flush (the request
transaction commits). The engine gets repositories that commit every write
so steps and ticket changes persist as the walk proceeds.
"""

from __future__ import annotations

from typing import Annotated

import httpx
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.services.action_dispatcher import ActionDispatcher
from app.application.services.condition_evaluator import ConditionEvaluator
from app.application.services.execution_recorder import ExecutionRecorder
from app.application.use_cases.workflows import (
    GraphExecutor,
    TriggerDispatcher,
    WorkflowManagementService,
)
from app.core.config import Settings, get_settings
from app.core.execution_coordinator import ExecutionCoordinator
from app.infrastructure.external.webhook import HttpWebhookSender
from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.persistence.repositories import (
    TicketRepository,
    WorkflowExecutionRepository,
    WorkflowRepository,
)


def get_execution_coordinator(request: Request) -> ExecutionCoordinator:
    """Process-wide coordinator created in the lifespan."""
    return request.app.state.execution_coordinator


def get_webhook_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound HTTP client created in the lifespan."""
    return request.app.state.webhook_http_client


def build_graph_executor(
    db: AsyncSession,
    coordinator: ExecutionCoordinator,
    webhook_client: httpx.AsyncClient,
    settings: Settings,
) -> GraphExecutor:
    """Wire the engine on one session (also used outside HTTP, e.g. workers)."""
    ticket_store = TicketRepository(db)
    workflow_repo = WorkflowRepository(db)
    recorder = ExecutionRecorder(WorkflowExecutionRepository(db))
    return GraphExecutor(
        workflow_repo,
        ticket_store,
        recorder,
        ConditionEvaluator(ticket_store),
        ActionDispatcher(
            ticket_store,
            HttpWebhookSender(webhook_client, user_agent=settings.webhook_user_agent),
            system_author_id=settings.workflow_system_author_id,
            escalation_reason=settings.workflow_escalation_reason,
        ),
        coordinator,
        action_timeout_seconds=settings.workflow_action_timeout_seconds,
        max_retries=settings.workflow_action_max_retries,
        retry_backoff_base=settings.workflow_retry_backoff_base,
    )


def _build_management_service(
    db: AsyncSession, coordinator: ExecutionCoordinator
) -> WorkflowManagementService:
    execution_repo = WorkflowExecutionRepository(db, autocommit=False)
    return WorkflowManagementService(
        WorkflowRepository(db),
        execution_repo,
        ExecutionRecorder(execution_repo),
        coordinator,
    )


async def get_workflow_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    coordinator: Annotated[ExecutionCoordinator, Depends(get_execution_coordinator)],
) -> WorkflowManagementService:
    """Workflow management for read operations (list, get, history)."""
    return _build_management_service(db, coordinator)


async def get_workflow_service_for_write(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    coordinator: Annotated[ExecutionCoordinator, Depends(get_execution_coordinator)],
) -> WorkflowManagementService:
    """Workflow management for create/update/delete/cancel (transactional)."""
    return _build_management_service(db, coordinator)


async def get_graph_executor(
    db: Annotated[AsyncSession, Depends(get_db)],
    coordinator: Annotated[ExecutionCoordinator, Depends(get_execution_coordinator)],
    webhook_client: Annotated[httpx.AsyncClient, Depends(get_webhook_client)],
) -> GraphExecutor:
    """Graph executor for manual execution."""
    return build_graph_executor(db, coordinator, webhook_client, get_settings())


async def get_trigger_dispatcher(
    db: Annotated[AsyncSession, Depends(get_db)],
    coordinator: Annotated[ExecutionCoordinator, Depends(get_execution_coordinator)],
    webhook_client: Annotated[httpx.AsyncClient, Depends(get_webhook_client)],
) -> TriggerDispatcher:
    """Trigger dispatcher for event ingestion."""
    executor = build_graph_executor(db, coordinator, webhook_client, get_settings())
    return TriggerDispatcher(TicketRepository(db), WorkflowRepository(db), executor)
