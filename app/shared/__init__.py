"""Shared utilities: enums, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.enums import (
    NodeKind,
    StepPhase,
    TriggerType,
    WorkflowExecutionStatus,
)
from app.shared.utils import (
    compute_backoff,
    ensure_utc,
    generate_cuid,
    hours_between,
    utc_now,
)

__all__ = [
    "NodeKind",
    "StepPhase",
    "TriggerType",
    "WorkflowExecutionStatus",
    "compute_backoff",
    "ensure_utc",
    "generate_cuid",
    "hours_between",
    "utc_now",
]
