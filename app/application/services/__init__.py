"""Application services: condition evaluation, action dispatch, execution recording."""

from app.application.services.action_dispatcher import ActionDispatcher
from app.application.services.condition_evaluator import ConditionEvaluator
from app.application.services.execution_recorder import ExecutionRecorder

__all__ = [
    "ActionDispatcher",
    "ConditionEvaluator",
    "ExecutionRecorder",
]
