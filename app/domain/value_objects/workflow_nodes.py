"""Typed workflow graph nodes and edges.

Node payloads are a closed tagged union: one frozen dataclass per condition
type and per action type, plus an explicit Unknown* variant so stored
definitions with an unrecognized discriminator still load (conditions fail
open, actions are skipped). Parsing accepts the editor's camelCase keys
(conditionType, tagId, webhookUrl, ...) as well as snake_case.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar

from app.domain.enums import TicketPriority, TicketStatus
from app.domain.exceptions import WorkflowDefinitionException
from app.shared.enums import NodeKind

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


def _snake_keys(data: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of data with camelCase keys converted to snake_case."""
    return {_CAMEL_RE.sub("_", str(k)).lower(): v for k, v in data.items()}


# ---- Conditions ----


@dataclass(frozen=True)
class PriorityCondition:
    """True iff ticket.priority equals value."""

    condition_type: ClassVar[str] = "priority"
    value: str


@dataclass(frozen=True)
class StatusCondition:
    """True iff ticket.status equals value."""

    condition_type: ClassVar[str] = "status"
    value: str


@dataclass(frozen=True)
class HasTagCondition:
    """True iff the (ticket, tag) association exists."""

    condition_type: ClassVar[str] = "has_tag"
    tag_id: str


@dataclass(frozen=True)
class TimeElapsedCondition:
    """True iff at least `hours` have passed since the ticket was created."""

    condition_type: ClassVar[str] = "time_elapsed"
    hours: float = 0.0


@dataclass(frozen=True)
class UnknownCondition:
    """Condition with an unrecognized type; evaluates to true (fail open)."""

    condition_type: str
    raw: dict[str, Any] = field(default_factory=dict)


ConditionSpec = (
    PriorityCondition
    | StatusCondition
    | HasTagCondition
    | TimeElapsedCondition
    | UnknownCondition
)


# ---- Actions ----


@dataclass(frozen=True)
class UpdateStatusAction:
    action_type: ClassVar[str] = "update_status"
    status: str


@dataclass(frozen=True)
class UpdatePriorityAction:
    action_type: ClassVar[str] = "update_priority"
    priority: str


@dataclass(frozen=True)
class AddTagAction:
    action_type: ClassVar[str] = "add_tag"
    tag_id: str


@dataclass(frozen=True)
class AssignAgentAction:
    action_type: ClassVar[str] = "assign_agent"
    agent_id: str


@dataclass(frozen=True)
class AddNoteAction:
    """Internal note; author_id None means the configured system author."""

    action_type: ClassVar[str] = "add_note"
    note_content: str
    author_id: str | None = None


@dataclass(frozen=True)
class EscalateAction:
    """Escalate the ticket; reason None means the configured default reason."""

    action_type: ClassVar[str] = "escalate"
    reason: str | None = None


@dataclass(frozen=True)
class SendWebhookAction:
    """POST {"ticketId", "data": webhook_data} to webhook_url."""

    action_type: ClassVar[str] = "send_webhook"
    webhook_url: str
    webhook_data: Any = None


@dataclass(frozen=True)
class UnknownAction:
    """Action with an unrecognized type; logged and skipped."""

    action_type: str
    raw: dict[str, Any] = field(default_factory=dict)


ActionSpec = (
    UpdateStatusAction
    | UpdatePriorityAction
    | AddTagAction
    | AssignAgentAction
    | AddNoteAction
    | EscalateAction
    | SendWebhookAction
    | UnknownAction
)

# Safe to re-run after a timeout: the final ticket state is the same.
IDEMPOTENT_ACTIONS: frozenset[type] = frozenset(
    {
        UpdateStatusAction,
        UpdatePriorityAction,
        AssignAgentAction,
        EscalateAction,
        AddTagAction,
    }
)


# ---- Nodes and edges ----


@dataclass(frozen=True)
class TriggerNode:
    """Entry point of a workflow graph. Executes as a no-op."""

    kind: ClassVar[NodeKind] = NodeKind.TRIGGER
    id: str


@dataclass(frozen=True)
class ConditionNode:
    kind: ClassVar[NodeKind] = NodeKind.CONDITION
    id: str
    condition: ConditionSpec


@dataclass(frozen=True)
class ActionNode:
    kind: ClassVar[NodeKind] = NodeKind.ACTION
    id: str
    action: ActionSpec


WorkflowNode = TriggerNode | ConditionNode | ActionNode


@dataclass(frozen=True)
class WorkflowEdge:
    """Directed edge between two nodes of the same definition."""

    id: str
    source: str
    target: str
    label: str | None = None


# ---- Parsing ----


def _require_str(data: Mapping[str, Any], key: str, node_id: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise WorkflowDefinitionException(
            f"Node {node_id}: '{key}' is required",
            node_id=node_id,
            field=key,
        )
    return value


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if isinstance(value, str) and value.strip():
        return value
    return None


def _require_choice(
    data: Mapping[str, Any], key: str, node_id: str, choices: list[str]
) -> str:
    value = _require_str(data, key, node_id)
    if value not in choices:
        raise WorkflowDefinitionException(
            f"Node {node_id}: '{key}' must be one of {', '.join(choices)}",
            node_id=node_id,
            field=key,
        )
    return value


def _parse_hours(data: Mapping[str, Any], node_id: str) -> float:
    raw = data.get("hours")
    if raw is None or raw == "":
        return 0.0
    try:
        hours = float(raw)
    except (TypeError, ValueError) as e:
        raise WorkflowDefinitionException(
            f"Node {node_id}: 'hours' must be a number",
            node_id=node_id,
            field="hours",
        ) from e
    if hours < 0:
        raise WorkflowDefinitionException(
            f"Node {node_id}: 'hours' must not be negative",
            node_id=node_id,
            field="hours",
        )
    return hours


def _parse_webhook_url(data: Mapping[str, Any], node_id: str) -> str:
    url = _require_str(data, "webhook_url", node_id)
    if not url.startswith(("http://", "https://")):
        raise WorkflowDefinitionException(
            f"Node {node_id}: 'webhook_url' must be an http(s) URL",
            node_id=node_id,
            field="webhook_url",
        )
    return url


_CONDITION_BUILDERS: dict[str, Callable[[dict[str, Any], str], ConditionSpec]] = {
    PriorityCondition.condition_type: lambda d, nid: PriorityCondition(
        value=_require_choice(d, "value", nid, TicketPriority.values())
    ),
    StatusCondition.condition_type: lambda d, nid: StatusCondition(
        value=_require_choice(d, "value", nid, TicketStatus.values())
    ),
    HasTagCondition.condition_type: lambda d, nid: HasTagCondition(
        tag_id=_require_str(d, "tag_id", nid)
    ),
    TimeElapsedCondition.condition_type: lambda d, nid: TimeElapsedCondition(
        hours=_parse_hours(d, nid)
    ),
}

_ACTION_BUILDERS: dict[str, Callable[[dict[str, Any], str], ActionSpec]] = {
    UpdateStatusAction.action_type: lambda d, nid: UpdateStatusAction(
        status=_require_choice(d, "status", nid, TicketStatus.values())
    ),
    UpdatePriorityAction.action_type: lambda d, nid: UpdatePriorityAction(
        priority=_require_choice(d, "priority", nid, TicketPriority.values())
    ),
    AddTagAction.action_type: lambda d, nid: AddTagAction(
        tag_id=_require_str(d, "tag_id", nid)
    ),
    AssignAgentAction.action_type: lambda d, nid: AssignAgentAction(
        agent_id=_require_str(d, "agent_id", nid)
    ),
    AddNoteAction.action_type: lambda d, nid: AddNoteAction(
        note_content=_require_str(d, "note_content", nid),
        author_id=_optional_str(d, "author_id"),
    ),
    EscalateAction.action_type: lambda d, nid: EscalateAction(
        reason=_optional_str(d, "reason")
    ),
    SendWebhookAction.action_type: lambda d, nid: SendWebhookAction(
        webhook_url=_parse_webhook_url(d, nid),
        webhook_data=d.get("webhook_data"),
    ),
}

CONDITION_TYPES: tuple[str, ...] = tuple(_CONDITION_BUILDERS)
ACTION_TYPES: tuple[str, ...] = tuple(_ACTION_BUILDERS)


def parse_condition(
    data: Mapping[str, Any], node_id: str, *, strict: bool = False
) -> ConditionSpec:
    """Build a typed condition from a node's data payload.

    With strict=True an unrecognized condition_type raises
    WorkflowDefinitionException; otherwise it becomes UnknownCondition.
    """
    normalized = _snake_keys(data)
    condition_type = _require_str(normalized, "condition_type", node_id)
    builder = _CONDITION_BUILDERS.get(condition_type)
    if builder is None:
        if strict:
            raise WorkflowDefinitionException(
                f"Node {node_id}: unknown condition type '{condition_type}'",
                node_id=node_id,
                field="condition_type",
            )
        return UnknownCondition(condition_type=condition_type, raw=normalized)
    return builder(normalized, node_id)


def parse_action(
    data: Mapping[str, Any], node_id: str, *, strict: bool = False
) -> ActionSpec:
    """Build a typed action from a node's data payload (see parse_condition for strict)."""
    normalized = _snake_keys(data)
    action_type = _require_str(normalized, "action_type", node_id)
    builder = _ACTION_BUILDERS.get(action_type)
    if builder is None:
        if strict:
            raise WorkflowDefinitionException(
                f"Node {node_id}: unknown action type '{action_type}'",
                node_id=node_id,
                field="action_type",
            )
        return UnknownAction(action_type=action_type, raw=normalized)
    return builder(normalized, node_id)


def parse_node(raw: Mapping[str, Any], *, strict: bool = False) -> WorkflowNode:
    """Build a typed node from its stored JSON form {id, type, data, position?}."""
    node_id = raw.get("id")
    if not isinstance(node_id, str) or not node_id:
        raise WorkflowDefinitionException("Every node requires a non-empty 'id'")
    kind = raw.get("type")
    data = raw.get("data") or {}
    if not isinstance(data, Mapping):
        raise WorkflowDefinitionException(
            f"Node {node_id}: 'data' must be an object", node_id=node_id
        )
    if kind == NodeKind.TRIGGER.value:
        return TriggerNode(id=node_id)
    if kind == NodeKind.CONDITION.value:
        return ConditionNode(
            id=node_id, condition=parse_condition(data, node_id, strict=strict)
        )
    if kind == NodeKind.ACTION.value:
        return ActionNode(id=node_id, action=parse_action(data, node_id, strict=strict))
    raise WorkflowDefinitionException(
        f"Node {node_id}: type must be one of {', '.join(NodeKind.values())}",
        node_id=node_id,
        field="type",
    )


def parse_edge(raw: Mapping[str, Any]) -> WorkflowEdge:
    """Build an edge from its stored JSON form {id, source, target, label?}."""
    edge_id = raw.get("id")
    source = raw.get("source")
    target = raw.get("target")
    if not all(isinstance(v, str) and v for v in (edge_id, source, target)):
        raise WorkflowDefinitionException(
            "Every edge requires non-empty 'id', 'source' and 'target'",
            edge_id=edge_id,
        )
    label = raw.get("label")
    return WorkflowEdge(
        id=edge_id,
        source=source,
        target=target,
        label=label if isinstance(label, str) else None,
    )
