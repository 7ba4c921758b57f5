"""
Command-line entry point for processing a single order.

Usage:
    order-dispatch Order#1234
    order-dispatch Order#1234 --json-logs --log-level DEBUG

Exit codes:
    0   all steps succeeded
    1   a step reported failure
    2   a step raised an error
    130 interrupted (Ctrl-C)
"""

import argparse
import json
import signal
import sys
import threading

from order_service.config import get_settings
from order_service.errors import DispatchInterruptedError, TaskExecutionError
from order_service.logging import configure_logging
from order_service.tasks import SIMULATED_LATENCY_MS, default_tasks

from .dispatcher import OrderDispatcher

EXIT_OK = 0
EXIT_SOFT_FAILURE = 1
EXIT_HARD_FAILURE = 2
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='order-dispatch',
        description='Run the inventory, shipping and accounting steps of an order concurrently',
    )
    parser.add_argument(
        'order_number',
        help='Order identifier passed unchanged to every step (e.g. Order#1234)',
    )
    parser.add_argument(
        '--json-logs',
        action='store_true',
        help='Emit JSON log lines instead of console output',
    )
    parser.add_argument(
        '--log-level', '-l',
        default=None,
        help='Override LOG_LEVEL (DEBUG, INFO, WARNING, ...)',
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.json_logs or args.log_level:
        configure_logging(
            json_output=args.json_logs or get_settings().LOG_JSON,
            log_level=args.log_level,
        )

    # Ctrl-C sets the event; the dispatcher and every step watch it
    interrupt = threading.Event()
    previous_handler = signal.signal(signal.SIGINT, lambda signum, frame: interrupt.set())

    dispatcher = OrderDispatcher(
        default_tasks(delay_ms=SIMULATED_LATENCY_MS, interrupt=interrupt)
    )

    try:
        result = dispatcher.process_order(args.order_number, interrupt)
    except TaskExecutionError as exc:
        print(json.dumps({'order_number': args.order_number, 'error': str(exc)}), file=sys.stderr)
        return EXIT_HARD_FAILURE
    except DispatchInterruptedError as exc:
        print(json.dumps({'order_number': args.order_number, 'error': str(exc)}), file=sys.stderr)
        return EXIT_INTERRUPTED
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    print(json.dumps(result.to_dict()))
    return EXIT_OK if result.all_succeeded else EXIT_SOFT_FAILURE


if __name__ == '__main__':
    sys.exit(main())
