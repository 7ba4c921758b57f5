"""
Order processing steps.

Each step logs which subsystem it is updating, waits out a fixed simulated
latency and reports success. No external system is contacted.
"""

import threading
from typing import Any

from .latency import simulate_latency
from .logging import get_logger
from .models import TaskDescriptor

# Fixed latency of every simulated subsystem call
SIMULATED_LATENCY_MS = 1000


class SimulatedStep:
    """
    Callable work-item action: log, wait, succeed.

    Args:
        name: Step name used in results
        event: Log event emitted when the step starts
        delay_ms: Simulated latency in milliseconds
        logger: Logger to emit the step line on (defaults to module logger)
        interrupt: Optional event that aborts the latency wait
    """

    def __init__(
        self,
        name: str,
        event: str,
        delay_ms: int = SIMULATED_LATENCY_MS,
        logger: Any | None = None,
        interrupt: threading.Event | None = None,
    ):
        self.name = name
        self.event = event
        self.delay_ms = delay_ms
        self.logger = logger or get_logger(__name__)
        self.interrupt = interrupt

    def __call__(self, order_number: str) -> bool:
        self.logger.info(self.event, task=self.name, order_number=order_number)
        simulate_latency(self.delay_ms, self.interrupt)
        return True

    def __repr__(self) -> str:
        return f'SimulatedStep(name={self.name!r}, delay_ms={self.delay_ms})'


def default_tasks(
    delay_ms: int = SIMULATED_LATENCY_MS,
    logger: Any | None = None,
    interrupt: threading.Event | None = None,
) -> list[TaskDescriptor]:
    """
    The fixed order processing steps, in submission order.

    Returns:
        Descriptors for inventory, shipping and accounting
    """
    steps = [
        ('inventory', 'inventory.updated'),
        ('shipping', 'shipping.notified'),
        ('accounting', 'accounting.updated'),
    ]
    return [
        TaskDescriptor(
            name=name,
            action=SimulatedStep(
                name, event, delay_ms=delay_ms, logger=logger, interrupt=interrupt
            ),
        )
        for name, event in steps
    ]
