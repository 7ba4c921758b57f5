"""
Order dispatcher for concurrent task execution.

Fans the work items of one order out to a bounded thread pool, waits for
every item to finish (a barrier, not a race) and fans the outcomes back in.

Fault isolation guarantee: one work item failing or raising never stops the
others. dispatch() captures every outcome; process_order() then inspects
them in submission order and reports the first failure.
"""

import contextvars
import threading
import time
from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import FIRST_COMPLETED, Executor, Future, ThreadPoolExecutor, wait
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from order_service.config import get_settings
from order_service.errors import DispatchInterruptedError, TaskExecutionError
from order_service.logging import get_logger, logging_context
from order_service.models import OrderResult, TaskDescriptor, TaskOutcome, WorkItem
from order_service.tasks import default_tasks

# How often the barrier checks the interrupt event
INTERRUPT_POLL_SECONDS = 0.05


def _default_pool_factory(max_workers: int) -> Callable[[], Executor]:
    def factory() -> Executor:
        return ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix='order-task')

    return factory


class OrderDispatcher:
    """
    Runs an order's processing steps concurrently on a worker pool.

    Pool ownership:
    - If ``executor`` is given, it is owned by the caller, reused for every
      order and never shut down here.
    - Otherwise a pool is created per call from ``pool_factory`` and shut
      down exactly once before the call returns or raises.
    """

    def __init__(
        self,
        tasks: Sequence[TaskDescriptor] | None = None,
        *,
        executor: Executor | None = None,
        pool_factory: Callable[[], Executor] | None = None,
        max_workers: int | None = None,
        logger: Any | None = None,
    ):
        """
        Initialize the dispatcher.

        Args:
            tasks: Steps to run per order (defaults to inventory, shipping, accounting)
            executor: Long-lived, externally owned pool to reuse across orders
            pool_factory: Creates a per-call pool when no executor is given
            max_workers: Size of the default per-call pool (defaults to settings)
            logger: Logger for dispatcher events (defaults to module logger)
        """
        self.tasks = list(tasks) if tasks is not None else default_tasks()
        self.executor = executor
        self.max_workers = max_workers or get_settings().ORDER_POOL_MAX_WORKERS
        self.pool_factory = pool_factory or _default_pool_factory(self.max_workers)
        self.logger = logger or get_logger(__name__)

        if executor is None and pool_factory is None and len(self.tasks) > self.max_workers:
            self.logger.warning(
                'dispatcher.pool_undersized',
                task_count=len(self.tasks),
                max_workers=self.max_workers,
            )

    def build_work_items(self, order_number: str) -> list[WorkItem]:
        """Bind every task descriptor to the order, in submission order."""
        return [task.bind(order_number) for task in self.tasks]

    def dispatch(
        self,
        order_number: str,
        interrupt: threading.Event | None = None,
    ) -> OrderResult:
        """
        Run all work items for an order and collect their outcomes.

        Flow:
        1. Acquire the pool and submit every work item
        2. Block until all of them have completed
        3. Release the pool, then build an OrderResult in submission order

        Args:
            order_number: Opaque order identifier passed to every work item
            interrupt: Optional event; setting it aborts the wait

        Returns:
            OrderResult with one TaskOutcome per work item

        Raises:
            DispatchInterruptedError: interrupt was set before all items finished
        """
        started_at = datetime.now()
        t0 = time.monotonic()
        log = self.logger.bind(order_number=order_number)

        result = OrderResult(order_number=order_number, started_at=started_at)
        work_items = self.build_work_items(order_number)

        log.debug('dispatcher.started', task_count=len(work_items))

        with logging_context(order_number=order_number):
            with self._acquire_pool() as pool:
                futures = [
                    pool.submit(contextvars.copy_context().run, item)
                    for item in work_items
                ]
                self._wait_for_all(futures, order_number, interrupt)

        # ------------------------------------------------------------------
        # Classify each outcome, in submission order
        # ------------------------------------------------------------------
        for item, future in zip(work_items, futures):
            outcome = self._outcome(item, future)
            result.outcomes.append(outcome)
            if outcome.error is not None:
                result.errors.append(
                    f'{item.name}: {type(outcome.error).__name__}: {outcome.error}'
                )
            elif not outcome.succeeded:
                result.errors.append(f'{item.name}: reported failure')

        result.completed_at = datetime.now()
        result.dispatch_time_ms = int((time.monotonic() - t0) * 1000)

        log.debug(
            'dispatcher.complete',
            outcome_count=len(result.outcomes),
            dispatch_time_ms=result.dispatch_time_ms,
        )
        return result

    def process_order(
        self,
        order_number: str,
        interrupt: threading.Event | None = None,
    ) -> OrderResult:
        """
        Process an order and report the first failure.

        Outcomes are inspected in submission order. A work item that returned
        False ends the inspection with a logged failure (soft failure); one
        that raised is re-raised as TaskExecutionError (hard failure). The
        pool has already been released in both cases.

        Args:
            order_number: Opaque order identifier passed to every work item
            interrupt: Optional event; setting it aborts the wait

        Returns:
            OrderResult; check ``all_succeeded`` for soft failures

        Raises:
            TaskExecutionError: a work item raised instead of returning
            DispatchInterruptedError: interrupt was set while waiting
        """
        result = self.dispatch(order_number, interrupt)
        log = self.logger.bind(order_number=order_number)

        for outcome in result.outcomes:
            if outcome.error is not None:
                log.error(
                    'order.task_faulted',
                    task=outcome.name,
                    error=str(outcome.error),
                    error_type=type(outcome.error).__name__,
                )
                raise TaskExecutionError(outcome.name, order_number, outcome.error) from outcome.error
            if not outcome.succeeded:
                log.warning('order.tasks_failed', task=outcome.name)
                return result

        log.info('order.completed', task_count=len(result.outcomes))
        return result

    @contextmanager
    def _acquire_pool(self) -> Iterator[Executor]:
        if self.executor is not None:
            yield self.executor
            return

        pool = self.pool_factory()
        try:
            yield pool
        finally:
            pool.shutdown(wait=True)

    def _wait_for_all(
        self,
        futures: list[Future],
        order_number: str,
        interrupt: threading.Event | None,
    ) -> None:
        if interrupt is None:
            wait(futures)
            return

        pending = set(futures)
        while pending and not interrupt.is_set():
            _, pending = wait(pending, timeout=INTERRUPT_POLL_SECONDS, return_when=FIRST_COMPLETED)

        # Steps watching the same event may all finish before the next poll
        if interrupt.is_set():
            for future in pending:
                future.cancel()
            self.logger.warning(
                'dispatcher.interrupted',
                order_number=order_number,
                pending=len(pending),
            )
            raise DispatchInterruptedError(order_number)

    @staticmethod
    def _outcome(item: WorkItem, future: Future) -> TaskOutcome:
        try:
            succeeded = future.result()
        # Pool workers record BaseException too (SystemExit from a step)
        except BaseException as exc:
            return TaskOutcome(name=item.name, succeeded=False, error=exc)
        return TaskOutcome(name=item.name, succeeded=bool(succeeded))
