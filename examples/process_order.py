#!/usr/bin/env python3
"""
Example: Process an order with its steps running concurrently.

This script demonstrates:
1. Processing Order#1234 with the default inventory, shipping and
   accounting steps on a per-call worker pool
2. Reusing one long-lived pool for several orders
3. A step that reports failure, and how it shows up in the result

Usage:
    python examples/process_order.py
"""

import sys
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from dotenv import load_dotenv

# Load environment variables
env_file = Path(__file__).parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)

from dispatcher import OrderDispatcher
from order_service import TaskDescriptor, default_tasks


def print_section(title: str) -> None:
    print('\n' + '=' * 70)
    print(f'  {title}')
    print('=' * 70)


def reject_shipping(order_number: str) -> bool:
    return False


def main() -> None:
    print_section('Single order, per-call pool')
    t0 = time.monotonic()
    result = OrderDispatcher().process_order('Order#1234')
    print(f'  all_succeeded={result.all_succeeded} elapsed={time.monotonic() - t0:.2f}s')

    print_section('Three orders, one shared pool')
    with ThreadPoolExecutor(max_workers=5, thread_name_prefix='shared-order') as pool:
        shared = OrderDispatcher(executor=pool)
        for order_number in ('Order#2001', 'Order#2002', 'Order#2003'):
            result = shared.process_order(order_number)
            print(f'  {order_number}: {result.to_dict()}')

    print_section('Shipping reports failure')
    tasks = default_tasks()
    tasks[1] = TaskDescriptor(name='shipping', action=reject_shipping)
    result = OrderDispatcher(tasks).process_order('Order#3001')
    print(f'  failed_task={result.failed_task} errors={result.errors}')


if __name__ == '__main__':
    main()
