"""ExecutionRecorder: step log and the single terminal transition."""

from datetime import UTC, datetime

import pytest

from app.application.services.execution_recorder import ExecutionRecorder
from app.domain.exceptions import (
    ExecutionAlreadyFinalizedException,
    ResourceNotFoundException,
)
from app.shared.enums import NodeKind, StepPhase, WorkflowExecutionStatus

NOW = datetime(2025, 3, 1, 9, 30, tzinfo=UTC)


@pytest.fixture
def recorder(execution_repo) -> ExecutionRecorder:
    return ExecutionRecorder(execution_repo, clock=lambda: NOW)


async def test_begin_creates_running_record(recorder) -> None:
    record_id = await recorder.begin("wf1", "tk1")
    record = await recorder.get(record_id)
    assert record.status == WorkflowExecutionStatus.RUNNING
    assert record.started_at == NOW
    assert record.completed_at is None
    assert record.step_log == []


async def test_steps_are_appended_in_order(recorder) -> None:
    record_id = await recorder.begin("wf1", "tk1")
    await recorder.append_step(record_id, "t", NodeKind.TRIGGER, StepPhase.STARTED)
    entry = await recorder.append_step(record_id, "t", NodeKind.TRIGGER, StepPhase.COMPLETED)
    assert entry.timestamp == NOW
    record = await recorder.get(record_id)
    assert [(s.node_id, s.phase) for s in record.step_log] == [
        ("t", StepPhase.STARTED),
        ("t", StepPhase.COMPLETED),
    ]


async def test_complete_sets_completed_at(recorder) -> None:
    record_id = await recorder.begin("wf1", "tk1")
    await recorder.complete(record_id)
    record = await recorder.get(record_id)
    assert record.status == WorkflowExecutionStatus.COMPLETED
    assert record.completed_at == NOW
    assert record.error_message is None


async def test_fail_keeps_error_message(recorder) -> None:
    record_id = await recorder.begin("wf1", "tk1")
    await recorder.fail(record_id, "boom")
    record = await recorder.get(record_id)
    assert record.status == WorkflowExecutionStatus.FAILED
    assert record.error_message == "boom"
    assert record.is_finished


async def test_second_terminal_transition_is_rejected(recorder) -> None:
    record_id = await recorder.begin("wf1", "tk1")
    await recorder.complete(record_id)
    with pytest.raises(ExecutionAlreadyFinalizedException):
        await recorder.fail(record_id, "late failure")
    record = await recorder.get(record_id)
    assert record.status == WorkflowExecutionStatus.COMPLETED
    assert record.error_message is None


async def test_finalize_unknown_record(recorder) -> None:
    with pytest.raises(ResourceNotFoundException):
        await recorder.complete("nope")


async def test_list_for_workflow_newest_first(execution_repo) -> None:
    times = iter(
        [datetime(2025, 3, 1, h, tzinfo=UTC) for h in (8, 9, 10)]
    )
    recorder = ExecutionRecorder(execution_repo, clock=lambda: next(times))
    first = await recorder.begin("wf1", "tk1")
    second = await recorder.begin("wf1", "tk2")
    await recorder.begin("wf2", "tk1")
    records = await recorder.list_for_workflow("wf1")
    assert [r.id for r in records] == [second, first]
    assert [r.id for r in await recorder.list_for_workflow("wf1", limit=1)] == [second]
