"""
Daily Rebalance Runner - One trading day end to end.

Wires the external collaborators around the core engine:

1. Resolve calendar facts for the evaluation date (NYSE)
2. Fetch and validate daily bars for every instrument
3. Evaluate the day with the engine (phase passed explicitly)
4. Append diagnostics to the CSV log (skipped during warm-up)
5. PREVIEW: build the desired-positions report
   LIVE: hand instructions to the order submitter
"""

import logging
import math
from datetime import date, timedelta
from typing import Dict, List, Optional

from riskpremia.core.engine import DailyDecision, RiskPremiaEngine
from riskpremia.core.report import format_desired_positions
from riskpremia.data.fetchers.base import DataFetcher
from riskpremia.data.validation import validate_market_data
from riskpremia.live.executor_router import ExecutorRouter, OrderSubmitter
from riskpremia.live.market_calendar import build_trading_day
from riskpremia.live.mode import RunPhase
from riskpremia.live.positions import PositionProvider
from riskpremia.performance.diagnostics_logger import DiagnosticsLogger
from riskpremia.utils.config import PortfolioConfig

logger = logging.getLogger('LIVE.RUNNER')


class DailyRebalanceRunner:
    """
    Run the daily sizing and rebalance cycle against live collaborators.

    The runner keeps no position state; restarting it mid-month is safe
    because positions come from the PositionProvider every day.
    """

    def __init__(
        self,
        config: PortfolioConfig,
        data_fetcher: DataFetcher,
        position_provider: PositionProvider,
        phase: RunPhase = RunPhase.PREVIEW,
        diagnostics_logger: Optional[DiagnosticsLogger] = None,
        order_submitter: Optional[OrderSubmitter] = None,
    ):
        """
        Args:
            config: Portfolio configuration
            data_fetcher: Source of daily OHLC history
            position_provider: Source of current positions
            phase: PREVIEW or LIVE (WARMUP forces warm-up behavior)
            diagnostics_logger: Optional CSV sink for daily diagnostics
            order_submitter: Broker submitter for LIVE (paper CSV if None)
        """
        self.config = config
        self.engine = RiskPremiaEngine(config)
        self.data_fetcher = data_fetcher
        self.position_provider = position_provider
        self.phase = phase
        self.diagnostics_logger = diagnostics_logger
        self.order_submitter = ExecutorRouter.create(phase, submitter=order_submitter)
        self.last_report: Optional[str] = None
        self.last_orders: List[Dict] = []

        logger.info(f"#####  {self.engine.trigger.describe()}  #####")
        logger.info(f"### Run phase: {phase}")

    @property
    def history_days(self) -> int:
        """Calendar days of history to request (covers lookback + holidays)."""
        return int(math.ceil((self.config.lookback_window + 1) * 7 / 5)) + 30

    def run_day(
        self,
        as_of: date,
        capital_exposure: Optional[float] = None
    ) -> DailyDecision:
        """
        Evaluate one trading day.

        Args:
            as_of: Evaluation date (must be a trading day)
            capital_exposure: USD notional override for today

        Returns:
            The engine's DailyDecision

        Raises:
            ValueError: If as_of is not a trading day
            MissingMarketData / StaleMarketData: If bars are incomplete
        """
        trading_day = build_trading_day(as_of)

        start_date = as_of - timedelta(days=self.history_days)
        raw = self.data_fetcher.fetch_many(self.config.symbols, start_date, as_of)
        market_data = validate_market_data(raw, self.config.symbols, as_of)

        decision = self.engine.evaluate_day(
            market_data=market_data,
            trading_day=trading_day,
            position_provider=self.position_provider,
            phase=self.phase,
            capital_exposure=capital_exposure,
        )
        logger.info(f"### {as_of} USD exposure: {decision.capital_exposure:.0f}")

        if decision.is_warmup:
            logger.info(f"{as_of}: warm-up day, diagnostics suppressed")
            self.last_report = None
            self.last_orders = []
            return decision

        if self.diagnostics_logger is not None:
            self.diagnostics_logger.log(decision.diagnostics)

        self.last_report = format_desired_positions(decision)
        for line in self.last_report.splitlines():
            logger.info(line)

        self.last_orders = []
        if decision.phase.is_live and self.order_submitter is not None:
            self.last_orders = self.order_submitter.submit(decision.instructions, decision.prices)
            logger.info(f"{as_of}: submitted {len(self.last_orders)} orders")

        return decision
