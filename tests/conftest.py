"""Pytest configuration and fixtures for the automation service.

HTTP tests use app.main:app through httpx ASGITransport; the database
dependencies are overridden with an in-memory SQLite engine (aiosqlite) so
no Postgres is needed. Unit tests use the in-memory fakes from tests.support.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.core.execution_coordinator import ExecutionCoordinator
from app.core.limiter import limiter
from app.infrastructure.persistence import models  # noqa: F401  (register tables)
from app.infrastructure.persistence.database import (
    Base,
    get_db,
    get_db_transactional,
)
from app.main import app
from tests.support import (
    ORG_ID,
    InMemoryExecutionRepository,
    InMemoryTicketStore,
    InMemoryWorkflowRepository,
    RecordingWebhookSender,
)


# ---- Ports (in-memory) ----


@pytest.fixture
def ticket_store() -> InMemoryTicketStore:
    return InMemoryTicketStore()


@pytest.fixture
def workflow_repo() -> InMemoryWorkflowRepository:
    return InMemoryWorkflowRepository()


@pytest.fixture
def execution_repo() -> InMemoryExecutionRepository:
    return InMemoryExecutionRepository()


@pytest.fixture
def webhook_sender() -> RecordingWebhookSender:
    return RecordingWebhookSender()


@pytest.fixture
def coordinator() -> ExecutionCoordinator:
    return ExecutionCoordinator()


# ---- SQL (in-memory SQLite) ----


@pytest.fixture
async def db_engine() -> AsyncIterator[AsyncEngine]:
    """Fresh in-memory database per test with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Database session for repository/integration tests."""
    async with session_factory() as session:
        yield session


# ---- HTTP ----


def webhook_handler(request: httpx.Request) -> httpx.Response:
    """Outbound webhook endpoint stub: /fail answers 500, anything else 200."""
    if request.url.path == "/fail":
        return httpx.Response(500)
    return httpx.Response(200, json={"received": True})


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI) backed by the SQLite engine.

    ASGITransport does not run the lifespan, so the state it would create is
    set here.
    """

    async def _get_db() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    async def _get_db_transactional() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            async with session.begin():
                yield session

    limiter.reset()
    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_db_transactional] = _get_db_transactional
    app.state.execution_coordinator = ExecutionCoordinator()
    app.state.webhook_http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(webhook_handler)
    )
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        await app.state.webhook_http_client.aclose()
        app.dependency_overrides.clear()


@pytest.fixture
def org_headers() -> dict[str, str]:
    return {"X-Organization-ID": ORG_ID}
