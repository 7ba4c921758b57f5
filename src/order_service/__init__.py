"""
Order Service

Processes an order by running its inventory, shipping and accounting steps
concurrently on a bounded worker pool.
"""

__version__ = '0.1.0'

# Re-export key classes for convenience
from .models import (
    ErrorKind,
    OrderResult,
    TaskDescriptor,
    TaskOutcome,
    WorkItem,
)
from .tasks import SIMULATED_LATENCY_MS, SimulatedStep, default_tasks
from .logging import (
    configure_logging,
    get_logger,
    logging_context,
)
from .errors import (
    OrderServiceError,
    DispatchError,
    TaskExecutionError,
    DispatchInterruptedError,
    TaskError,
    TaskInterruptedError,
)

__all__ = [
    # Version
    '__version__',
    # Models
    'ErrorKind',
    'OrderResult',
    'TaskDescriptor',
    'TaskOutcome',
    'WorkItem',
    # Tasks
    'SIMULATED_LATENCY_MS',
    'SimulatedStep',
    'default_tasks',
    # Logging
    'configure_logging',
    'get_logger',
    'logging_context',
    # Errors
    'OrderServiceError',
    'DispatchError',
    'TaskExecutionError',
    'DispatchInterruptedError',
    'TaskError',
    'TaskInterruptedError',
]
