"""Workflow node parsing and graph validation."""

import pytest

from app.application.use_cases.workflows import validate_definition
from app.domain.entities.workflow import WorkflowGraph
from app.domain.exceptions import WorkflowDefinitionException
from app.domain.value_objects.workflow_nodes import (
    ActionNode,
    AddNoteAction,
    ConditionNode,
    EscalateAction,
    HasTagCondition,
    SendWebhookAction,
    TimeElapsedCondition,
    UnknownAction,
    UnknownCondition,
    parse_action,
    parse_condition,
    parse_node,
)
from tests.support import action, condition, edge, escalate_urgent_graph, trigger


def test_parse_condition_accepts_camel_case_keys() -> None:
    parsed = parse_condition({"conditionType": "has_tag", "tagId": "vip"}, "c1")
    assert parsed == HasTagCondition(tag_id="vip")


def test_parse_condition_accepts_snake_case_keys() -> None:
    parsed = parse_condition({"condition_type": "time_elapsed", "hours": "24"}, "c1")
    assert parsed == TimeElapsedCondition(hours=24.0)


def test_time_elapsed_without_hours_defaults_to_zero() -> None:
    assert parse_condition({"conditionType": "time_elapsed"}, "c1") == TimeElapsedCondition()


def test_time_elapsed_rejects_negative_hours() -> None:
    with pytest.raises(WorkflowDefinitionException) as exc_info:
        parse_condition({"conditionType": "time_elapsed", "hours": -1}, "c1")
    assert exc_info.value.details["field"] == "hours"


def test_priority_condition_requires_known_value() -> None:
    with pytest.raises(WorkflowDefinitionException):
        parse_condition({"conditionType": "priority", "value": "CRITICAL"}, "c1")


def test_unknown_condition_is_kept_when_lenient() -> None:
    parsed = parse_condition({"conditionType": "sentiment", "score": 3}, "c1")
    assert isinstance(parsed, UnknownCondition)
    assert parsed.condition_type == "sentiment"


def test_unknown_condition_rejected_when_strict() -> None:
    with pytest.raises(WorkflowDefinitionException) as exc_info:
        parse_condition({"conditionType": "sentiment"}, "c1", strict=True)
    assert exc_info.value.details["node_id"] == "c1"


def test_unknown_action_is_kept_when_lenient() -> None:
    parsed = parse_action({"actionType": "send_sms"}, "a1")
    assert isinstance(parsed, UnknownAction)


def test_add_note_author_is_optional() -> None:
    parsed = parse_action({"actionType": "add_note", "noteContent": "Looked at it"}, "a1")
    assert parsed == AddNoteAction(note_content="Looked at it", author_id=None)


def test_escalate_reason_is_optional() -> None:
    assert parse_action({"actionType": "escalate"}, "a1") == EscalateAction(reason=None)


def test_webhook_requires_http_url() -> None:
    with pytest.raises(WorkflowDefinitionException):
        parse_action({"actionType": "send_webhook", "webhookUrl": "ftp://x"}, "a1")
    parsed = parse_action(
        {
            "actionType": "send_webhook",
            "webhookUrl": "https://hooks.example.com/t",
            "webhookData": {"k": "v"},
        },
        "a1",
    )
    assert parsed == SendWebhookAction(
        webhook_url="https://hooks.example.com/t", webhook_data={"k": "v"}
    )


def test_parse_node_rejects_unknown_node_type() -> None:
    with pytest.raises(WorkflowDefinitionException):
        parse_node({"id": "x", "type": "delay", "data": {}})


def test_graph_keeps_outgoing_edge_definition_order() -> None:
    graph = WorkflowGraph.build(
        [trigger(), action("a2", "add_tag", tagId="b"), action("a1", "add_tag", tagId="a")],
        [edge("t", "a2"), edge("t", "a1")],
    )
    assert [n.id for n in graph.successors("t")] == ["a2", "a1"]
    assert isinstance(graph.nodes["a1"], ActionNode)


def test_graph_requires_a_trigger() -> None:
    with pytest.raises(WorkflowDefinitionException, match="No trigger node found"):
        WorkflowGraph.build([action("a", "escalate")], [])


def test_graph_rejects_two_triggers() -> None:
    with pytest.raises(WorkflowDefinitionException) as exc_info:
        WorkflowGraph.build([trigger("t1"), trigger("t2")], [])
    assert exc_info.value.details["trigger_node_ids"] == ["t1", "t2"]


def test_graph_rejects_duplicate_node_ids() -> None:
    with pytest.raises(WorkflowDefinitionException, match="Duplicate node id"):
        WorkflowGraph.build([trigger(), action("t", "escalate")], [])


def test_graph_rejects_dangling_edge() -> None:
    with pytest.raises(WorkflowDefinitionException) as exc_info:
        WorkflowGraph.build([trigger()], [edge("t", "ghost")])
    assert exc_info.value.details["node_id"] == "ghost"


def test_cycle_allowed_at_runtime_but_rejected_on_save() -> None:
    nodes = [trigger(), action("a", "add_tag", tagId="x"), action("b", "add_tag", tagId="y")]
    edges = [edge("t", "a"), edge("a", "b"), edge("b", "a")]
    graph = WorkflowGraph.build(nodes, edges)
    assert graph.find_cycle() == ["a", "b", "a"]
    with pytest.raises(WorkflowDefinitionException, match="cycle"):
        validate_definition(nodes, edges)


def test_validate_definition_rejects_unknown_types() -> None:
    with pytest.raises(WorkflowDefinitionException):
        validate_definition([trigger(), condition("c", "sentiment")], [edge("t", "c")])


def test_validate_definition_accepts_valid_graph() -> None:
    nodes, edges = escalate_urgent_graph()
    graph = validate_definition(nodes, edges)
    assert graph.trigger.id == "t"
    assert isinstance(graph.nodes["c"], ConditionNode)
