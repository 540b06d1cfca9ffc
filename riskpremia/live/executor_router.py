"""
Executor Router - Order submission interface and factory.

This module provides:
- OrderSubmitter: Abstract base class for everything that receives
  TradeInstructions (broker adapters, paper logger)
- ExecutorRouter: Picks the submitter for a run phase
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

from riskpremia.core.models import TradeInstruction
from riskpremia.live.mode import RunPhase

logger = logging.getLogger('LIVE.EXECUTOR_ROUTER')

# Orders are placed market-on-close
DEFAULT_ORDER_TYPE = 'MOC'


def order_for_submission(instructions: Sequence[TradeInstruction]) -> List[TradeInstruction]:
    """SELL instructions first (to raise cash), then BUY, stable within each side."""
    sells = [i for i in instructions if i.signed_quantity < 0]
    buys = [i for i in instructions if i.signed_quantity > 0]
    return sells + buys


class OrderSubmitter(ABC):
    """
    Abstract base class for order submitters.

    Retrying failed submissions is the submitter's concern, never the
    core's.
    """

    @abstractmethod
    def submit(
        self,
        instructions: Sequence[TradeInstruction],
        reference_prices: Mapping[str, float],
        reason: str = "Rebalance"
    ) -> List[Dict]:
        """
        Submit trade instructions.

        Args:
            instructions: Orders produced by the core for today
            reference_prices: {symbol: close} used for value estimates
            reason: Trade rationale for logging

        Returns:
            List of order dictionaries (symbol, action, qty, ...)

        Raises:
            OrderSubmissionError: If submission fails
        """
        raise NotImplementedError("Subclasses must implement submit()")


class ExecutorRouter:
    """
    Factory that picks the order submitter for a run phase.

    - WARMUP / PREVIEW: no submitter (nothing is ever sent)
    - LIVE: the injected broker submitter, or DryRunExecutor (paper
      trading to CSV) when none is given

    Usage:
        submitter = ExecutorRouter.create(RunPhase.LIVE, trade_log_path=Path('logs/live_trades.csv'))
    """

    @staticmethod
    def create(
        phase: RunPhase,
        submitter: Optional[OrderSubmitter] = None,
        trade_log_path: Optional[Path] = None
    ) -> Optional[OrderSubmitter]:
        """
        Args:
            phase: Run phase
            submitter: Broker submitter for LIVE phase
            trade_log_path: Trade log for the paper submitter

        Returns:
            OrderSubmitter for LIVE, None otherwise
        """
        if not phase.is_live:
            logger.info(f"Phase {phase}: no order submitter")
            return None

        if submitter is not None:
            logger.info(f"Phase {phase}: using {type(submitter).__name__}")
            return submitter

        from riskpremia.live.dry_run_executor import DryRunExecutor

        logger.warning(f"Phase {phase}: no broker submitter given, paper trading to CSV")
        if trade_log_path is None:
            return DryRunExecutor()
        return DryRunExecutor(trade_log_path=trade_log_path)
