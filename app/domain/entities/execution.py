"""Workflow execution record and step log entries.

One record per (workflow, ticket) graph walk. The step log is append-only
and the status leaves RUNNING exactly once.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.shared.enums import NodeKind, StepPhase, WorkflowExecutionStatus
from app.shared.utils.datetime import ensure_utc


@dataclass(frozen=True)
class StepEntry:
    """One node lifecycle event within an execution."""

    node_id: str
    node_kind: NodeKind
    phase: StepPhase
    timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the JSON execution_log column."""
        return {
            "node_id": self.node_id,
            "node_kind": self.node_kind.value,
            "phase": self.phase.value,
            "timestamp": self.timestamp.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StepEntry":
        """Deserialize an entry from the execution_log column."""
        return cls(
            node_id=data["node_id"],
            node_kind=NodeKind(data["node_kind"]),
            phase=StepPhase(data["phase"]),
            timestamp=ensure_utc(datetime.fromisoformat(data["timestamp"])),
        )


@dataclass
class ExecutionRecord:
    """Audit/result object for one graph walk against one ticket."""

    id: str
    workflow_id: str
    ticket_id: str
    status: WorkflowExecutionStatus
    started_at: datetime
    completed_at: datetime | None = None
    step_log: list[StepEntry] = field(default_factory=list)
    error_message: str | None = None

    @property
    def is_finished(self) -> bool:
        """Return whether the record reached a terminal status."""
        return self.status.is_terminal
