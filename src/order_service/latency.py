"""Blocking delay used to stand in for external-system latency."""

import threading
import time

from .errors import TaskInterruptedError
from .logging import get_logger

logger = get_logger(__name__)


def simulate_latency(delay_ms: int, interrupt: threading.Event | None = None) -> None:
    """
    Block the calling thread for ``delay_ms`` milliseconds.

    When an ``interrupt`` event is given, the wait ends early as soon as the
    event is set and TaskInterruptedError is raised; an interruption is
    always a fault, never a return value.
    """
    if delay_ms < 0:
        raise ValueError(f'delay_ms must be non-negative, got {delay_ms}')

    seconds = delay_ms / 1000
    if interrupt is None:
        time.sleep(seconds)
        return

    if interrupt.wait(seconds):
        logger.warning('latency.interrupted', delay_ms=delay_ms)
        raise TaskInterruptedError(
            'Interrupt occurred during simulated latency',
            context={'delay_ms': delay_ms},
        )
