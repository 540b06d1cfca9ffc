"""
Daily diagnostics record handed to the external append-only log.

One record per instrument per evaluation (warm-up days excluded). The
core builds records and never reads them back.
"""
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from riskpremia.core.models import InstrumentState, TradingDay
from riskpremia.core.rebalance import RebalanceTrigger, tracking_error

DIAGNOSTICS_COLUMNS = [
    'Date', 'Symbol', 'Open', 'High', 'Low', 'Close',
    'CurrentPosition', 'Exposure', 'TargetPosition', 'PositionDelta',
    'CurrentVolatility', 'TargetVolatility', 'TradingDaysUntilRebalance',
    'TrackingError', 'TrackingErrorThreshold',
]


@dataclass(frozen=True)
class DailyDiagnosticsRecord:
    """
    Read-only projection of one instrument's state for the day.

    tracking_error is None when the target position is zero.
    tracking_error_threshold is 0 in calendar mode.
    """
    date: date
    symbol: str
    open: float
    high: float
    low: float
    close: float
    current_position: int
    exposure: float
    target_position: int
    position_delta: int
    current_volatility: float
    target_volatility: float
    trading_days_until_rebalance: int
    tracking_error: Optional[float]
    tracking_error_threshold: float

    def as_row(self) -> List[str]:
        """Render the record as CSV cells in DIAGNOSTICS_COLUMNS order."""
        return [
            self.date.isoformat(),
            self.symbol,
            f"{self.open:.5f}",
            f"{self.high:.5f}",
            f"{self.low:.5f}",
            f"{self.close:.5f}",
            str(self.current_position),
            f"{self.exposure:.2f}",
            str(self.target_position),
            str(self.position_delta),
            f"{self.current_volatility:.3f}",
            f"{self.target_volatility:.2f}",
            str(self.trading_days_until_rebalance),
            '' if self.tracking_error is None else f"{self.tracking_error:.2f}",
            f"{self.tracking_error_threshold:.2f}",
        ]


def build_diagnostics_record(
    instrument: InstrumentState,
    trading_day: TradingDay,
    trigger: RebalanceTrigger,
    vol_target: float
) -> DailyDiagnosticsRecord:
    """
    Assemble the diagnostics record for one instrument.

    Args:
        instrument: Sized instrument with current/target positions
        trading_day: Calendar facts for today
        trigger: Active rebalance trigger (supplies threshold and schedule)
        vol_target: Configured volatility target
    """
    bar = instrument.bar
    return DailyDiagnosticsRecord(
        date=trading_day.date,
        symbol=instrument.symbol,
        open=bar.open,
        high=bar.high,
        low=bar.low,
        close=bar.close,
        current_position=instrument.current_position,
        exposure=instrument.exposure,
        target_position=instrument.target_position,
        position_delta=instrument.position_delta,
        current_volatility=instrument.annualized_volatility,
        target_volatility=vol_target,
        trading_days_until_rebalance=trigger.trading_days_until_rebalance(trading_day),
        tracking_error=tracking_error(instrument.target_position, instrument.current_position),
        tracking_error_threshold=trigger.tracking_error_threshold,
    )
