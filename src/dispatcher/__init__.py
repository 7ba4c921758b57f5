"""
Order dispatcher for concurrent task execution.

Runs the inventory, shipping and accounting steps of an order on a bounded
worker pool and reports the first failure in submission order.
"""

from .dispatcher import OrderDispatcher

__all__ = ['OrderDispatcher']
