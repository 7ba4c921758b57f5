"""
Tests for the order-dispatch command line.

The dispatcher is mocked for exit-code tests; one test runs the real steps
with a short latency.
"""

import json
from unittest.mock import MagicMock, patch

import pytest

from dispatcher import cli
from order_service.errors import DispatchInterruptedError, TaskExecutionError
from order_service.models import OrderResult, TaskOutcome


def _result(*outcomes: TaskOutcome) -> OrderResult:
    return OrderResult(order_number='Order#1234', outcomes=list(outcomes), dispatch_time_ms=5)


@pytest.fixture
def mock_dispatcher():
    """Patch OrderDispatcher in the CLI module and return the instance mock."""
    with patch.object(cli, 'OrderDispatcher') as dispatcher_cls:
        instance = MagicMock()
        dispatcher_cls.return_value = instance
        yield instance


class TestParser:
    def test_parses_order_number_and_flags(self):
        args = cli.build_parser().parse_args(['Order#1234', '--json-logs', '-l', 'DEBUG'])

        assert args.order_number == 'Order#1234'
        assert args.json_logs is True
        assert args.log_level == 'DEBUG'

    def test_order_number_required(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args([])


class TestExitCodes:
    def test_success(self, mock_dispatcher, capsys):
        mock_dispatcher.process_order.return_value = _result(
            TaskOutcome(name='inventory', succeeded=True),
        )

        assert cli.main(['Order#1234']) == cli.EXIT_OK

        summary = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert summary['all_succeeded'] is True
        assert mock_dispatcher.process_order.call_args[0][0] == 'Order#1234'

    def test_soft_failure(self, mock_dispatcher, capsys):
        mock_dispatcher.process_order.return_value = _result(
            TaskOutcome(name='inventory', succeeded=True),
            TaskOutcome(name='shipping', succeeded=False),
        )

        assert cli.main(['Order#1234']) == cli.EXIT_SOFT_FAILURE

        summary = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert summary['failed_task'] == 'shipping'

    def test_hard_failure(self, mock_dispatcher, capsys):
        mock_dispatcher.process_order.side_effect = TaskExecutionError(
            'shipping', 'Order#1234', RuntimeError('carrier down')
        )

        assert cli.main(['Order#1234']) == cli.EXIT_HARD_FAILURE
        assert 'carrier down' in capsys.readouterr().err

    def test_interrupted(self, mock_dispatcher):
        mock_dispatcher.process_order.side_effect = DispatchInterruptedError('Order#1234')

        assert cli.main(['Order#1234']) == cli.EXIT_INTERRUPTED


class TestEndToEnd:
    def test_real_steps(self, monkeypatch, capsys):
        """Runs the three simulated steps with a short latency."""
        monkeypatch.setattr(cli, 'SIMULATED_LATENCY_MS', 10)

        assert cli.main(['Order#1234']) == cli.EXIT_OK

        summary = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert summary['order_number'] == 'Order#1234'
        assert summary['tasks'] == {
            'inventory': 'succeeded',
            'shipping': 'succeeded',
            'accounting': 'succeeded',
        }
