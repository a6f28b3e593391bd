"""Workflow definition repository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.workflow import WorkflowChanges, WorkflowCreate
from app.domain.entities.workflow import WorkflowEntity
from app.infrastructure.persistence.models.workflow import Workflow
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc


def _to_entity(w: Workflow) -> WorkflowEntity:
    """Map Workflow ORM to WorkflowEntity."""
    return WorkflowEntity(
        id=w.id,
        organization_id=w.organization_id,
        name=w.name,
        description=w.description,
        trigger_type=w.trigger_type,
        nodes=list(w.nodes or []),
        edges=list(w.edges or []),
        active=w.active,
        created_at=ensure_utc(w.created_at),
        updated_at=ensure_utc(w.updated_at),
    )


class WorkflowRepository(BaseRepository[Workflow]):
    """Workflow repository. Implements IWorkflowRepository."""

    def __init__(self, db: AsyncSession, *, autocommit: bool = False) -> None:
        super().__init__(db, Workflow, autocommit=autocommit)

    async def get_by_id(self, workflow_id: str) -> WorkflowEntity | None:
        row = await self.get_model(workflow_id)
        return _to_entity(row) if row else None

    async def get_by_id_and_organization(
        self, workflow_id: str, organization_id: str
    ) -> WorkflowEntity | None:
        row = await self._get_scoped(workflow_id, organization_id)
        return _to_entity(row) if row else None

    async def list_by_organization(self, organization_id: str) -> list[WorkflowEntity]:
        result = await self.db.execute(
            select(Workflow)
            .where(Workflow.organization_id == organization_id)
            .order_by(Workflow.created_at.desc())
        )
        return [_to_entity(w) for w in result.scalars().all()]

    async def list_active_by_trigger(
        self, organization_id: str, trigger_type: str
    ) -> list[WorkflowEntity]:
        result = await self.db.execute(
            select(Workflow)
            .where(
                Workflow.organization_id == organization_id,
                Workflow.trigger_type == trigger_type,
                Workflow.active.is_(True),
            )
            .order_by(Workflow.created_at.asc())
        )
        return [_to_entity(w) for w in result.scalars().all()]

    async def create_workflow(
        self, organization_id: str, data: WorkflowCreate
    ) -> WorkflowEntity:
        """Create workflow; return created entity."""
        workflow = Workflow(
            organization_id=organization_id,
            name=data.name,
            description=data.description,
            trigger_type=data.trigger_type,
            nodes=list(data.nodes),
            edges=list(data.edges),
            active=data.active,
        )
        return _to_entity(await self.add(workflow))

    async def update_workflow(
        self, workflow_id: str, organization_id: str, changes: WorkflowChanges
    ) -> WorkflowEntity | None:
        """Apply set fields of changes. Nodes and edges are replaced wholesale."""
        workflow = await self._get_scoped(workflow_id, organization_id)
        if workflow is None:
            return None
        if changes.name is not None:
            workflow.name = changes.name
        if changes.description is not None:
            workflow.description = changes.description
        if changes.trigger_type is not None:
            workflow.trigger_type = changes.trigger_type
        if changes.nodes is not None:
            workflow.nodes = list(changes.nodes)
        if changes.edges is not None:
            workflow.edges = list(changes.edges)
        if changes.active is not None:
            workflow.active = changes.active
        await self._save()
        await self.db.refresh(workflow)
        return _to_entity(workflow)

    async def delete_workflow(self, workflow_id: str, organization_id: str) -> bool:
        workflow = await self._get_scoped(workflow_id, organization_id)
        if workflow is None:
            return False
        await self.remove(workflow)
        return True

    async def _get_scoped(
        self, workflow_id: str, organization_id: str
    ) -> Workflow | None:
        result = await self.db.execute(
            select(Workflow).where(
                Workflow.id == workflow_id,
                Workflow.organization_id == organization_id,
            )
        )
        return result.scalar_one_or_none()
