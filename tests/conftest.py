"""
Pytest configuration and shared fixtures.

Key fixtures:
- captured_logs: structlog events emitted during the test
- pool_tracker: per-call pool factory that counts acquire/release
- make_tasks: builds fast task descriptors from plain callables

No external services are required; every work item is an in-process fake
or a simulated step with a short delay.
"""

import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest
import structlog

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

# Load environment variables
from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)

import order_service.logging  # noqa: E402  configures structlog on import
from order_service.models import TaskDescriptor  # noqa: E402

# Cached loggers would keep the processors they saw first; capture_logs
# needs every logger to pick up its processor on each call.
structlog.configure(cache_logger_on_first_use=False)


class TrackingPool(ThreadPoolExecutor):
    """ThreadPoolExecutor that reports shutdown() calls to its tracker."""

    def __init__(self, tracker: 'PoolTracker', max_workers: int = 5):
        super().__init__(max_workers=max_workers, thread_name_prefix='tracked-order')
        self.tracker = tracker

    def shutdown(self, wait: bool = True, *, cancel_futures: bool = False) -> None:
        with self.tracker.lock:
            self.tracker.released += 1
        super().shutdown(wait=wait, cancel_futures=cancel_futures)


class PoolTracker:
    """Pool factory double recording how many pools were acquired and released."""

    def __init__(self):
        self.lock = threading.Lock()
        self.acquired = 0
        self.released = 0
        self.pools: list[TrackingPool] = []

    def __call__(self) -> TrackingPool:
        with self.lock:
            self.acquired += 1
        pool = TrackingPool(self)
        self.pools.append(pool)
        return pool


@pytest.fixture
def captured_logs():
    """Log events (dicts with 'event' and 'log_level') emitted during the test."""
    with structlog.testing.capture_logs() as logs:
        yield logs


@pytest.fixture
def pool_tracker() -> PoolTracker:
    return PoolTracker()


def succeed(order_number: str) -> bool:
    return True


def report_failure(order_number: str) -> bool:
    return False


@pytest.fixture
def make_tasks():
    """
    Build descriptors named inventory, shipping, accounting from callables.

    Usage:
        tasks = make_tasks(shipping=report_failure)
    """

    def _make(**overrides) -> list[TaskDescriptor]:
        return [
            TaskDescriptor(name=name, action=overrides.get(name, succeed))
            for name in ('inventory', 'shipping', 'accounting')
        ]

    return _make


def events(logs: list[dict], name: str) -> list[dict]:
    """Captured log entries with the given event name."""
    return [entry for entry in logs if entry['event'] == name]
