"""DTOs for workflow definition use cases (no dependency on ORM or presentation schemas)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class WorkflowCreate:
    """Input for creating a workflow definition. Nodes and edges are editor JSON."""

    name: str
    trigger_type: str
    nodes: list[dict[str, Any]]
    edges: list[dict[str, Any]]
    description: str | None = None
    active: bool = True


@dataclass(frozen=True)
class WorkflowChanges:
    """Partial update. None means unchanged; nodes and edges replace wholesale."""

    name: str | None = None
    description: str | None = None
    trigger_type: str | None = None
    nodes: list[dict[str, Any]] | None = None
    edges: list[dict[str, Any]] | None = None
    active: bool | None = None

    @property
    def touches_graph(self) -> bool:
        return self.nodes is not None or self.edges is not None
