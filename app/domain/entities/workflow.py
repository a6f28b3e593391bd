"""Workflow domain entity and its executable graph.

A workflow is an organization-owned definition: a trigger type plus a graph
of trigger, condition and action nodes. Nodes and edges are stored as JSON
and replaced wholesale on update; WorkflowGraph is the validated, typed view
used by the executor.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from app.domain.exceptions import WorkflowDefinitionException
from app.domain.value_objects.workflow_nodes import (
    TriggerNode,
    WorkflowEdge,
    WorkflowNode,
    parse_edge,
    parse_node,
)


@dataclass
class WorkflowEntity:
    """Domain entity for a workflow definition (trigger type + node graph)."""

    id: str
    organization_id: str
    name: str
    description: str | None
    trigger_type: str
    nodes: list[dict[str, Any]]
    edges: list[dict[str, Any]]
    active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def belongs_to_organization(self, organization_id: str) -> bool:
        """Return whether this workflow belongs to the given organization."""
        return self.organization_id == organization_id

    def can_trigger_on(self, trigger_type: str) -> bool:
        """Return whether this workflow is active and listens for the trigger type."""
        return self.active and self.trigger_type == trigger_type

    def graph(self) -> WorkflowGraph:
        """Build the executable graph (lenient: unknown node payload types are kept)."""
        return WorkflowGraph.build(self.nodes, self.edges)


class WorkflowGraph:
    """Validated node/edge graph with exactly one trigger node.

    Outgoing edges keep definition order so traversal is deterministic.
    """

    def __init__(
        self,
        nodes: dict[str, WorkflowNode],
        edges: list[WorkflowEdge],
        trigger: TriggerNode,
    ) -> None:
        self.nodes = nodes
        self.edges = edges
        self.trigger = trigger
        self._outgoing: dict[str, list[WorkflowEdge]] = {node_id: [] for node_id in nodes}
        for edge in edges:
            self._outgoing[edge.source].append(edge)

    @classmethod
    def build(
        cls,
        raw_nodes: Iterable[Mapping[str, Any]],
        raw_edges: Iterable[Mapping[str, Any]],
        *,
        strict: bool = False,
        require_acyclic: bool = False,
    ) -> WorkflowGraph:
        """Parse and validate stored nodes and edges.

        Raises WorkflowDefinitionException when a node id is duplicated, the
        trigger node is missing or not unique, an edge references a node
        outside the definition, or (with require_acyclic) the graph has a
        cycle. strict=True also rejects unknown condition/action types.
        """
        nodes: dict[str, WorkflowNode] = {}
        for raw in raw_nodes:
            node = parse_node(raw, strict=strict)
            if node.id in nodes:
                raise WorkflowDefinitionException(
                    f"Duplicate node id: {node.id}", node_id=node.id
                )
            nodes[node.id] = node

        triggers = [n for n in nodes.values() if isinstance(n, TriggerNode)]
        if not triggers:
            raise WorkflowDefinitionException("No trigger node found")
        if len(triggers) > 1:
            raise WorkflowDefinitionException(
                f"Workflow has {len(triggers)} trigger nodes; exactly one is required",
                trigger_node_ids=[t.id for t in triggers],
            )

        edges: list[WorkflowEdge] = []
        for raw in raw_edges:
            edge = parse_edge(raw)
            for endpoint in (edge.source, edge.target):
                if endpoint not in nodes:
                    raise WorkflowDefinitionException(
                        f"Edge {edge.id} references unknown node {endpoint}",
                        edge_id=edge.id,
                        node_id=endpoint,
                    )
            edges.append(edge)

        graph = cls(nodes, edges, triggers[0])
        if require_acyclic:
            cycle = graph.find_cycle()
            if cycle:
                raise WorkflowDefinitionException(
                    f"Workflow graph contains a cycle: {' -> '.join(cycle)}",
                    cycle=cycle,
                )
        return graph

    def outgoing(self, node_id: str) -> list[WorkflowEdge]:
        """Return the outgoing edges of a node in definition order."""
        return self._outgoing.get(node_id, [])

    def successors(self, node_id: str) -> list[WorkflowNode]:
        """Return the target nodes of a node's outgoing edges in definition order."""
        return [self.nodes[edge.target] for edge in self.outgoing(node_id)]

    def find_cycle(self) -> list[str] | None:
        """Return one cycle as a node-id path (first id repeated at the end), or None."""
        white, grey, black = 0, 1, 2
        color = {node_id: white for node_id in self.nodes}
        path: list[str] = []

        def visit(node_id: str) -> list[str] | None:
            color[node_id] = grey
            path.append(node_id)
            for edge in self.outgoing(node_id):
                if color[edge.target] == grey:
                    start = path.index(edge.target)
                    return [*path[start:], edge.target]
                if color[edge.target] == white:
                    found = visit(edge.target)
                    if found:
                        return found
            path.pop()
            color[node_id] = black
            return None

        for node_id in self.nodes:
            if color[node_id] == white:
                found = visit(node_id)
                if found:
                    return found
        return None
