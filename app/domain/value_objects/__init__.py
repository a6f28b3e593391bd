"""Domain value objects: typed workflow nodes, edges and their payloads."""

from app.domain.value_objects.workflow_nodes import (
    ACTION_TYPES,
    CONDITION_TYPES,
    IDEMPOTENT_ACTIONS,
    ActionNode,
    ActionSpec,
    AddNoteAction,
    AddTagAction,
    AssignAgentAction,
    ConditionNode,
    ConditionSpec,
    EscalateAction,
    HasTagCondition,
    PriorityCondition,
    SendWebhookAction,
    StatusCondition,
    TimeElapsedCondition,
    TriggerNode,
    UnknownAction,
    UnknownCondition,
    UpdatePriorityAction,
    UpdateStatusAction,
    WorkflowEdge,
    WorkflowNode,
    parse_action,
    parse_condition,
    parse_edge,
    parse_node,
)

__all__ = [
    "ACTION_TYPES",
    "CONDITION_TYPES",
    "IDEMPOTENT_ACTIONS",
    "ActionNode",
    "ActionSpec",
    "AddNoteAction",
    "AddTagAction",
    "AssignAgentAction",
    "ConditionNode",
    "ConditionSpec",
    "EscalateAction",
    "HasTagCondition",
    "PriorityCondition",
    "SendWebhookAction",
    "StatusCondition",
    "TimeElapsedCondition",
    "TriggerNode",
    "UnknownAction",
    "UnknownCondition",
    "UpdatePriorityAction",
    "UpdateStatusAction",
    "WorkflowEdge",
    "WorkflowNode",
    "parse_action",
    "parse_condition",
    "parse_edge",
    "parse_node",
]
