"""
Dry-Run Order Executor - Log hypothetical trades without execution.

Records the core's TradeInstructions to CSV for paper trading and
post-market validation. NO ACTUAL ORDERS are placed.
"""

import csv
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Mapping, Sequence

from riskpremia.core.models import TradeInstruction
from riskpremia.live.exceptions import OrderSubmissionError
from riskpremia.live.executor_router import (
    DEFAULT_ORDER_TYPE,
    OrderSubmitter,
    order_for_submission,
)

logger = logging.getLogger('LIVE.DRY_RUN')

TRADE_LOG_COLUMNS = [
    'Date', 'Time', 'Ticker', 'Action', 'Qty', 'Price', 'Value',
    'EstCommission', 'OrderType', 'Reason', 'Mode'
]


class DryRunExecutor(OrderSubmitter):
    """
    Paper submitter: log hypothetical orders to CSV.

    SELL orders are logged before BUY orders, as a broker would be asked
    to execute them.
    """

    def __init__(self, trade_log_path: Path = Path('logs/live_trades.csv')):
        """
        Initialize dry-run executor.

        Args:
            trade_log_path: Path to trade log CSV file
        """
        self.trade_log_path = Path(trade_log_path)

        self.trade_log_path.parent.mkdir(parents=True, exist_ok=True)

        if not self.trade_log_path.exists() or self.trade_log_path.stat().st_size == 0:
            self._initialize_csv()

        logger.info(f"DryRunExecutor initialized: {self.trade_log_path}")

    def _initialize_csv(self) -> None:
        """Create CSV with header."""
        with open(self.trade_log_path, 'w', newline='') as f:
            csv.writer(f).writerow(TRADE_LOG_COLUMNS)
        logger.debug(f"Initialized trade log: {self.trade_log_path}")

    def submit(
        self,
        instructions: Sequence[TradeInstruction],
        reference_prices: Mapping[str, float],
        reason: str = "Rebalance"
    ) -> List[Dict]:
        """
        Log hypothetical orders to CSV.

        Returns:
            List of order dictionaries (for validation reporting)

        Raises:
            OrderSubmissionError: If the trade log cannot be written
        """
        if not instructions:
            logger.info("No orders to log (no instructions)")
            return []

        now = datetime.now(timezone.utc)
        date_str = now.strftime('%Y-%m-%d')
        time_str = now.strftime('%H:%M:%S')

        try:
            orders = self._write_orders(instructions, reference_prices, reason, date_str, time_str)
        except OSError as e:
            logger.error(f"Cannot write trade log {self.trade_log_path}: {e}")
            raise OrderSubmissionError(f"Cannot write trade log {self.trade_log_path}: {e}") from e

        logger.info(f"Logged {len(orders)} hypothetical orders to {self.trade_log_path}")
        return orders

    def _write_orders(
        self,
        instructions: Sequence[TradeInstruction],
        reference_prices: Mapping[str, float],
        reason: str,
        date_str: str,
        time_str: str
    ) -> List[Dict]:
        orders = []

        with open(self.trade_log_path, 'a', newline='') as f:
            writer = csv.writer(f)

            for instruction in order_for_submission(instructions):
                symbol = instruction.symbol
                if symbol not in reference_prices:
                    logger.warning(f"Missing price for {symbol}, skipping order log")
                    continue

                price = float(reference_prices[symbol])
                value = instruction.quantity * price

                writer.writerow([
                    date_str,
                    time_str,
                    symbol,
                    instruction.side,
                    instruction.quantity,
                    f"{price:.2f}",
                    f"{value:.2f}",
                    f"{instruction.total_commission:.2f}",
                    DEFAULT_ORDER_TYPE,
                    reason,
                    "DRY-RUN"
                ])

                order = {
                    'date': date_str,
                    'time': time_str,
                    'symbol': symbol,
                    'action': instruction.side,
                    'qty': instruction.quantity,
                    'price': price,
                    'value': value,
                    'commission': instruction.total_commission,
                    'order_type': DEFAULT_ORDER_TYPE,
                    'reason': reason,
                    'mode': 'DRY-RUN'
                }
                orders.append(order)

                logger.info(
                    f"HYPOTHETICAL {instruction.side} {DEFAULT_ORDER_TYPE}: "
                    f"{instruction.quantity} {symbol} @ ${price:.2f} = ${value:,.2f} ({reason})"
                )

        return orders
