"""
Unit tests for Dry-Run Executor.

Tests sell-first ordering, commission estimates, and CSV logging.
"""

import csv

import pytest

from riskpremia.core.models import TradeInstruction
from riskpremia.live.dry_run_executor import TRADE_LOG_COLUMNS, DryRunExecutor
from riskpremia.live.exceptions import CriticalFailure, OrderSubmissionError

PRICES = {'GLD': 183.76, 'TLT': 171.11, 'VTI': 164.68}


@pytest.fixture
def executor(tmp_path):
    """Create DryRunExecutor with temporary log file."""
    return DryRunExecutor(trade_log_path=tmp_path / 'logs' / 'live_trades.csv')


def read_rows(path):
    with open(path, newline='') as f:
        return list(csv.reader(f))


class TestDryRunExecutor:
    """Test suite for DryRunExecutor class."""

    def test_initialization_creates_csv(self, executor):
        """Test that CSV is created with header on init."""
        assert executor.trade_log_path.exists()
        assert read_rows(executor.trade_log_path) == [TRADE_LOG_COLUMNS]

    def test_existing_log_not_truncated(self, executor):
        """Test re-opening an existing log appends instead of rewriting."""
        executor.submit([TradeInstruction('GLD', 10, 0.1)], PRICES)

        reopened = DryRunExecutor(trade_log_path=executor.trade_log_path)
        reopened.submit([TradeInstruction('TLT', 5, 0.2)], PRICES)

        rows = read_rows(executor.trade_log_path)
        assert rows[0] == TRADE_LOG_COLUMNS
        assert [row[2] for row in rows[1:]] == ['GLD', 'TLT']

    def test_sells_logged_before_buys(self, executor):
        """Test SELL orders come first to raise cash."""
        instructions = [
            TradeInstruction('GLD', 18, 1.0 / 18),
            TradeInstruction('TLT', -12, 1.0 / 12),
            TradeInstruction('VTI', 4, 0.25),
        ]

        orders = executor.submit(instructions, PRICES)

        assert [(o['action'], o['symbol']) for o in orders] == [
            ('SELL', 'TLT'), ('BUY', 'GLD'), ('BUY', 'VTI')
        ]

    def test_order_fields(self, executor):
        """Test value, commission and order type of a logged order."""
        orders = executor.submit([TradeInstruction('VTI', 4, 0.25)], PRICES, reason="Tracking error")

        order = orders[0]
        assert order['qty'] == 4
        assert order['price'] == 164.68
        assert order['value'] == pytest.approx(658.72)
        assert order['commission'] == pytest.approx(1.0)
        assert order['order_type'] == 'MOC'
        assert order['reason'] == "Tracking error"
        assert order['mode'] == 'DRY-RUN'

        row = read_rows(executor.trade_log_path)[1]
        assert row[2:] == ['VTI', 'BUY', '4', '164.68', '658.72', '1.00', 'MOC', 'Tracking error', 'DRY-RUN']

    def test_no_instructions(self, executor):
        """Test nothing is logged when there is nothing to trade."""
        assert executor.submit([], PRICES) == []
        assert len(read_rows(executor.trade_log_path)) == 1

    def test_missing_price_skipped(self, executor):
        """Test an instruction without a reference price is not logged."""
        orders = executor.submit([TradeInstruction('SPY', 10, 0.1)], PRICES)
        assert orders == []


class TestTradeLogWriteFailure:
    """Test that an unwritable trade log aborts submission."""

    def test_unwritable_log_raises(self, executor):
        """Test a trade log path that cannot be opened raises OrderSubmissionError."""
        executor.trade_log_path.unlink()
        executor.trade_log_path.mkdir()

        with pytest.raises(OrderSubmissionError, match="Cannot write trade log"):
            executor.submit([TradeInstruction('GLD', 10, 0.1)], PRICES)

    def test_write_failure_is_critical(self, executor):
        """Test the submission error aborts the run like other critical failures."""
        executor.trade_log_path.unlink()
        executor.trade_log_path.mkdir()

        with pytest.raises(CriticalFailure):
            executor.submit([TradeInstruction('VTI', -3, 0.5)], PRICES)

    def test_empty_instructions_do_not_touch_log(self, executor):
        """Test nothing is written, and nothing raised, when there are no orders."""
        executor.trade_log_path.unlink()
        executor.trade_log_path.mkdir()

        assert executor.submit([], PRICES) == []
