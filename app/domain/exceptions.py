"""Domain exceptions for the automation service.

Defines domain-level exceptions that represent business rule violations
and workflow execution failures. These exceptions are independent of
infrastructure concerns. Presentation layer maps them to HTTP responses in
exception handlers; the graph executor records them on the execution.
"""

from typing import Any


class AutomationException(Exception):
    """Base exception for all automation service errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the API exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(AutomationException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(AutomationException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'workflow', 'ticket').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class WorkflowDefinitionException(AutomationException):
    """Raised when a workflow graph is malformed (trigger count, dangling edge, cycle)."""

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message, "WORKFLOW_DEFINITION_ERROR", details)


class ActionTimeoutException(AutomationException):
    """Raised when an action handler exceeds its deadline."""

    def __init__(self, action_type: str, timeout_seconds: float) -> None:
        super().__init__(
            f"Action '{action_type}' timed out after {timeout_seconds:g} seconds",
            "ACTION_TIMEOUT",
            {"action_type": action_type, "timeout_seconds": timeout_seconds},
        )


class ExecutionCancelledException(AutomationException):
    """Raised inside a graph walk when its cancellation token is set."""

    def __init__(self, execution_id: str) -> None:
        super().__init__(
            f"Execution cancelled: {execution_id}",
            "EXECUTION_CANCELLED",
            {"execution_id": execution_id},
        )


class ExecutionAlreadyFinalizedException(AutomationException):
    """Raised when completing or failing an execution that is no longer running."""

    def __init__(self, execution_id: str) -> None:
        super().__init__(
            f"Execution already finalized: {execution_id}",
            "EXECUTION_ALREADY_FINALIZED",
            {"execution_id": execution_id},
        )


class SqlNotConfiguredException(AutomationException):
    """Raised when an operation requires the SQL database but it is not configured."""

    def __init__(self) -> None:
        super().__init__(
            message="This operation requires a SQL database that is not configured.",
            error_code="SERVICE_UNAVAILABLE",
        )
