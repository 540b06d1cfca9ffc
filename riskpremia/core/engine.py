"""
Risk Premia Engine - One trading day of sizing and rebalance decisions.

Pipeline per day:
1. Volatility per instrument from daily closes
2. Inverse-volatility sizes, uniformly scaled under the leverage cap
3. Whole-share targets: floor(capital * constrained size / close)
4. Current positions read fresh from the PositionProvider
5. Rebalance trigger decides which instruments act
6. Position deltas become TradeInstructions (LIVE phase only)

The engine is stateless across days: calling evaluate_day twice with the
same inputs returns the same decision.

Example:
    engine = RiskPremiaEngine(config)
    decision = engine.evaluate_day(
        market_data={'GLD': gld_df, 'TLT': tlt_df, 'VTI': vti_df},
        trading_day=build_trading_day(date(2020, 7, 30)),
        position_provider=StaticPositionProvider({'GLD': 140}),
        phase=RunPhase.PREVIEW,
    )
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

import pandas as pd

from riskpremia.core.allocator import Allocation, SizeAllocator
from riskpremia.core.diagnostics import DailyDiagnosticsRecord, build_diagnostics_record
from riskpremia.core.models import Bar, InstrumentState, TradeInstruction, TradingDay
from riskpremia.core.position_delta import PositionDeltaCalculator
from riskpremia.core.position_rounder import PositionRounder
from riskpremia.core.rebalance import RebalanceState, RebalanceTrigger, create_trigger
from riskpremia.core.volatility import VolatilityEstimator, simple_returns
from riskpremia.live.mode import RunPhase
from riskpremia.live.positions import PositionProvider
from riskpremia.utils.config import PortfolioConfig

logger = logging.getLogger('CORE.ENGINE')

REQUIRED_COLUMNS = ['open', 'high', 'low', 'close']


@dataclass(frozen=True)
class DailyDecision:
    """
    Everything the core decided for one trading day.

    Warm-up decisions carry no instruments, instructions or diagnostics.
    """
    trading_day: TradingDay
    phase: RunPhase
    capital_exposure: float
    instruments: Tuple[InstrumentState, ...] = ()
    allocation: Optional[Allocation] = None
    rebalance_states: Dict[str, RebalanceState] = field(default_factory=dict)
    instructions: Tuple[TradeInstruction, ...] = ()
    diagnostics: Tuple[DailyDiagnosticsRecord, ...] = ()

    @property
    def is_warmup(self) -> bool:
        return self.phase.is_warmup

    @property
    def target_positions(self) -> Dict[str, int]:
        return {i.symbol: i.target_position for i in self.instruments}

    @property
    def current_positions(self) -> Dict[str, int]:
        return {i.symbol: i.current_position for i in self.instruments}

    @property
    def prices(self) -> Dict[str, float]:
        return {i.symbol: i.price for i in self.instruments}

    @property
    def acting_symbols(self) -> List[str]:
        return [s for s, state in self.rebalance_states.items() if state.should_act]


class RiskPremiaEngine:
    """
    Daily sizing and rebalance decision engine.

    Built once per run from a PortfolioConfig; holds only configuration
    and the components derived from it.
    """

    def __init__(self, config: PortfolioConfig):
        """
        Args:
            config: Validated portfolio configuration
        """
        self.config = config
        self.estimator = VolatilityEstimator(
            lookback_window=config.lookback_window,
            annualization_factor=config.annualization_factor,
        )
        self.allocator = SizeAllocator(
            vol_target=config.vol_target,
            max_leverage=config.max_leverage,
        )
        self.trigger: RebalanceTrigger = create_trigger(config.rebalance_policy)
        self.delta_calculator = PositionDeltaCalculator(
            min_commission=config.min_commission,
            per_share_commission=config.per_share_commission,
        )

        logger.info(
            f"Engine initialized: {len(config.symbols)} instruments {config.symbols}, "
            f"lookback={config.lookback_window}, vol_target={config.vol_target}, "
            f"max_leverage={config.max_leverage}, {self.trigger.describe()}"
        )

    def build_instruments(self, market_data: Mapping[str, pd.DataFrame]) -> List[InstrumentState]:
        """
        Build today's instrument states from daily OHLC frames.

        Args:
            market_data: {symbol: DataFrame} with open/high/low/close
                columns, oldest row first, last row = evaluation day

        Returns:
            InstrumentState per configured symbol, in configuration order

        Raises:
            ValueError: If a symbol is missing, empty, or lacks OHLC columns
        """
        instruments = []

        for symbol in self.config.symbols:
            if symbol not in market_data:
                raise ValueError(f"Missing required symbol data: {symbol}")

            df = market_data[symbol]
            if df.empty:
                raise ValueError(f"No bars for {symbol}")

            missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
            if missing:
                raise ValueError(f"Missing required columns for {symbol}: {missing}")

            last = df.iloc[-1]
            bar = Bar(
                open=float(last['open']),
                high=float(last['high']),
                low=float(last['low']),
                close=float(last['close']),
            )
            if bar.close <= 0:
                raise ValueError(f"Invalid close for {symbol}: {bar.close} (must be > 0)")

            prices = df['close'].astype(float).reset_index(drop=True)
            instruments.append(InstrumentState(symbol=symbol, prices=prices, bar=bar))

        return instruments

    def in_warmup(self, instruments: List[InstrumentState]) -> bool:
        """True while any instrument has fewer than lookback_window returns."""
        short = [
            i.symbol for i in instruments
            if not self.estimator.has_sufficient_history(i.prices)
        ]
        if short:
            logger.info(
                f"Warm-up: {short} have fewer than {self.estimator.min_prices} closes"
            )
        return bool(short)

    def size_instruments(
        self,
        instruments: List[InstrumentState],
        capital_exposure: float
    ) -> Allocation:
        """
        Fill volatility, sizes and target positions in place.

        Targets are recomputed from scratch on every call.
        """
        for instrument in instruments:
            instrument.returns = simple_returns(instrument.prices)
            instrument.annualized_volatility = self.estimator.estimate(instrument.prices)

        allocation = self.allocator.allocate(
            {i.symbol: i.annualized_volatility for i in instruments}
        )

        for instrument in instruments:
            instrument.theoretical_size = allocation.theoretical_sizes[instrument.symbol]
            instrument.constrained_size = allocation.constrained_sizes[instrument.symbol]
            instrument.target_position = PositionRounder.target_position(
                capital_exposure, instrument.constrained_size, instrument.price
            )

        return allocation

    def evaluate_day(
        self,
        market_data: Mapping[str, pd.DataFrame],
        trading_day: TradingDay,
        position_provider: PositionProvider,
        phase: RunPhase,
        capital_exposure: Optional[float] = None
    ) -> DailyDecision:
        """
        Run the full daily pipeline.

        Args:
            market_data: {symbol: DataFrame} of daily OHLC bars up to and
                including the evaluation day
            trading_day: Calendar facts for the evaluation day
            position_provider: Source of current open + pending quantities
            phase: Lifecycle phase (WARMUP, PREVIEW or LIVE)
            capital_exposure: USD notional override (default: config value)

        Returns:
            DailyDecision. Instructions are only populated in LIVE phase.

        Raises:
            ValueError: If inputs are incomplete or invalid
        """
        capital = self.config.capital_exposure if capital_exposure is None else capital_exposure
        if capital < 0:
            raise ValueError(f"Invalid capital exposure: {capital} (must be >= 0)")

        instruments = self.build_instruments(market_data)

        if phase.is_warmup or self.in_warmup(instruments):
            logger.info(f"{trading_day.date}: warm-up, no trading decisions")
            return DailyDecision(
                trading_day=trading_day,
                phase=RunPhase.WARMUP,
                capital_exposure=capital,
            )

        allocation = self.size_instruments(instruments, capital)

        for instrument in instruments:
            instrument.current_position = position_provider.get_position(instrument.symbol)
            logger.info(
                f"{instrument.symbol}: current {instrument.current_position} shares, "
                f"desired {instrument.target_position} shares @ {instrument.price:.2f}"
            )

        states = self.trigger.evaluate(instruments, trading_day)

        diagnostics = tuple(
            build_diagnostics_record(instrument, trading_day, self.trigger, self.config.vol_target)
            for instrument in instruments
        )

        instructions: List[TradeInstruction] = []
        if phase.is_live:
            for instrument in instruments:
                if not states[instrument.symbol].should_act:
                    continue
                instruction = self.delta_calculator.calculate(
                    instrument.symbol,
                    instrument.current_position,
                    instrument.target_position,
                )
                if instruction is not None:
                    instructions.append(instruction)

        logger.info(
            f"{trading_day.date} [{phase}]: acting on "
            f"{[s for s, st in states.items() if st.should_act]}, "
            f"{len(instructions)} instructions"
        )

        return DailyDecision(
            trading_day=trading_day,
            phase=phase,
            capital_exposure=capital,
            instruments=tuple(instruments),
            allocation=allocation,
            rebalance_states=states,
            instructions=tuple(instructions),
            diagnostics=diagnostics,
        )
