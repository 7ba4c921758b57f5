"""
Custom exceptions for the order service.

Provides:
- Typed exception hierarchy for hard failures (raised faults, interruptions)
- Error context preservation for debugging

Soft failures (a work item returning False) are not exceptions; they are
reported as ErrorKind.BUSINESS_FAILURE on the task outcome.
"""

from typing import Any


class OrderServiceError(Exception):
    """Base exception for all order service errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


# =============================================================================
# Dispatcher Errors
# =============================================================================


class DispatchError(OrderServiceError):
    """Base class for dispatcher-level failures."""

    pass


class TaskExecutionError(DispatchError):
    """A work item raised an unhandled fault while executing."""

    def __init__(self, task_name: str, order_number: str, cause: BaseException):
        super().__init__(
            f"Task '{task_name}' failed for order {order_number}: {cause}",
            context={
                'task': task_name,
                'order_number': order_number,
                'error_type': type(cause).__name__,
            },
        )
        self.task_name = task_name
        self.order_number = order_number
        self.cause = cause


class DispatchInterruptedError(DispatchError):
    """The dispatcher was interrupted while waiting for work items."""

    def __init__(self, order_number: str):
        super().__init__(
            f"Interrupted while waiting for order {order_number}",
            context={'order_number': order_number},
        )
        self.order_number = order_number


# =============================================================================
# Task Errors
# =============================================================================


class TaskError(OrderServiceError):
    """Base class for failures raised inside a work item."""

    pass


class TaskInterruptedError(TaskError):
    """Simulated latency was interrupted before it elapsed."""

    pass
