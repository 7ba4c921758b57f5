"""
Data model for order task dispatch.

A TaskDescriptor names one step of order processing and the callable that
performs it. Binding a descriptor to an order number yields a WorkItem, the
unit submitted to the worker pool. Each finished WorkItem produces one
TaskOutcome; an OrderResult pairs the outcomes with the order positionally
in submission order.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from .errors import TaskInterruptedError


class ErrorKind(str, Enum):
    """Why a work item did not succeed."""

    BUSINESS_FAILURE = 'business_failure'
    TASK_EXECUTION = 'task_execution'
    INTERRUPTED = 'interrupted'


@dataclass(frozen=True)
class WorkItem:
    """One independently schedulable step bound to a single order."""

    name: str
    order_number: str
    action: Callable[[str], bool]

    def __call__(self) -> bool:
        return self.action(self.order_number)


@dataclass(frozen=True)
class TaskDescriptor:
    """A named step of order processing with its execution function."""

    name: str
    action: Callable[[str], bool]

    def bind(self, order_number: str) -> WorkItem:
        """Create the work item that runs this step for one order."""
        return WorkItem(name=self.name, order_number=order_number, action=self.action)


@dataclass
class TaskOutcome:
    """
    Result of a single work item.

    ``succeeded`` holds the boolean the item returned; ``error`` holds the
    exception it raised instead (never both).
    """

    name: str
    succeeded: bool = False
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.succeeded and self.error is None

    @property
    def error_kind(self) -> ErrorKind | None:
        if self.error is not None:
            if isinstance(self.error, TaskInterruptedError):
                return ErrorKind.INTERRUPTED
            return ErrorKind.TASK_EXECUTION
        if not self.succeeded:
            return ErrorKind.BUSINESS_FAILURE
        return None


@dataclass
class OrderResult:
    """
    Aggregate result of dispatching one order's work items.

    ``outcomes`` is ordered like the submitted tasks, regardless of the order
    in which the tasks actually finished.
    """

    order_number: str
    outcomes: list[TaskOutcome] = field(default_factory=list)

    # Timing
    started_at: datetime | None = None
    completed_at: datetime | None = None
    dispatch_time_ms: int | None = None

    # One line per work item that did not succeed
    errors: list[str] = field(default_factory=list)

    @property
    def all_succeeded(self) -> bool:
        """True when every work item returned True without raising."""
        return all(o.ok for o in self.outcomes)

    @property
    def first_failure(self) -> TaskOutcome | None:
        """The first outcome in submission order that did not succeed."""
        return next((o for o in self.outcomes if not o.ok), None)

    @property
    def failed_task(self) -> str | None:
        failure = self.first_failure
        return failure.name if failure else None

    def to_dict(self) -> dict[str, Any]:
        """Serialize for logging / CLI output."""
        return {
            'order_number': self.order_number,
            'all_succeeded': self.all_succeeded,
            'failed_task': self.failed_task,
            'tasks': {
                o.name: o.error_kind.value if o.error_kind else 'succeeded'
                for o in self.outcomes
            },
            'dispatch_time_ms': self.dispatch_time_ms,
            'errors': self.errors,
        }
