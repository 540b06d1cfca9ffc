"""
Rebalance triggers - decide whether to trade today.

Two mutually exclusive modes, selected once per run from configuration:

- TrackingErrorTrigger: each instrument is evaluated on its own and acts
  when its holding drifts more than `threshold` away from target.
- CalendarTrigger: the whole portfolio acts together on a given trading
  day of the month.

Both modes also act whenever there is nothing held yet, so the first
evaluation after warm-up always enters the portfolio. Triggers carry no
state between days: every evaluation starts from IDLE.

Usage:
    from riskpremia.core.rebalance import create_trigger

    trigger = create_trigger(config.rebalance_policy)
    states = trigger.evaluate(instruments, trading_day)
"""
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Optional, Sequence

from riskpremia.core.models import InstrumentState, TradingDay
from riskpremia.utils.config import CalendarPolicy, RebalancePolicy, TrackingErrorPolicy

logger = logging.getLogger('CORE.REBALANCE')


class RebalanceState(Enum):
    """Per-evaluation decision state."""

    IDLE = "idle"
    ACT_TODAY = "act_today"

    @property
    def should_act(self) -> bool:
        return self == RebalanceState.ACT_TODAY


def tracking_error(target_position: int, current_position: int) -> Optional[float]:
    """
    Relative deviation of the current holding from target.

    Args:
        target_position: Whole shares wanted
        current_position: Whole shares held (open + pending)

    Returns:
        |target - current| / target, or None when target is zero

    Examples:
        >>> tracking_error(100, 85)
        0.15
        >>> tracking_error(0, 10) is None
        True
    """
    if target_position == 0:
        return None
    return abs(target_position - current_position) / target_position


class RebalanceTrigger(ABC):
    """
    Abstract base class for rebalance triggers.

    Subclasses must implement:
        - evaluate(): {symbol: RebalanceState} for one trading day
        - describe(): startup banner naming the rebalancing approach
    """

    @abstractmethod
    def evaluate(
        self,
        instruments: Sequence[InstrumentState],
        trading_day: TradingDay
    ) -> Dict[str, RebalanceState]:
        """
        Decide which instruments act today.

        Args:
            instruments: Today's sized instruments (targets and current
                positions already filled in)
            trading_day: Calendar facts for today

        Returns:
            {symbol: RebalanceState} covering every instrument
        """
        raise NotImplementedError("Subclasses must implement evaluate()")

    @abstractmethod
    def describe(self) -> str:
        raise NotImplementedError("Subclasses must implement describe()")

    @property
    def tracking_error_threshold(self) -> float:
        """Threshold reported in diagnostics (0 unless tracking-error mode)."""
        return 0.0

    def trading_days_until_rebalance(self, trading_day: TradingDay) -> int:
        """Trading days until the next scheduled rebalance (0 if unscheduled)."""
        return 0


class TrackingErrorTrigger(RebalanceTrigger):
    """
    Per-instrument trigger on relative drift from target.

    An instrument acts when its volatility estimate is positive and
    any of the following holds:
    - tracking error is strictly greater than the threshold
    - nothing is held or pending (initial entry)
    - target is zero while shares are still held (forced exit)
    """

    def __init__(self, threshold: float):
        if not (0 < threshold < 1):
            raise ValueError(f"Invalid tracking error threshold: {threshold} (must be in (0, 1))")
        self.threshold = threshold

    @property
    def tracking_error_threshold(self) -> float:
        return self.threshold

    def describe(self) -> str:
        return f"REBALANCING ON {100 * self.threshold:.1f} % TRACKING ERROR"

    def should_act(self, instrument: InstrumentState) -> bool:
        """Evaluate the trigger for one instrument."""
        if instrument.annualized_volatility <= 0:
            return False

        if instrument.current_position == 0:
            logger.info(f"{instrument.symbol}: no open or pending position -> ACT_TODAY")
            return True

        error = tracking_error(instrument.target_position, instrument.current_position)
        if error is None:
            logger.info(
                f"{instrument.symbol}: target is 0 with {instrument.current_position} "
                f"shares held -> forced exit"
            )
            return True

        if error > self.threshold:
            logger.info(
                f"{instrument.symbol}: tracking error {error:.4f} > {self.threshold:.4f} -> ACT_TODAY"
            )
            return True

        logger.debug(
            f"{instrument.symbol}: tracking error {error:.4f} <= {self.threshold:.4f} -> IDLE"
        )
        return False

    def evaluate(
        self,
        instruments: Sequence[InstrumentState],
        trading_day: TradingDay
    ) -> Dict[str, RebalanceState]:
        return {
            instrument.symbol: (
                RebalanceState.ACT_TODAY if self.should_act(instrument) else RebalanceState.IDLE
            )
            for instrument in instruments
        }


class CalendarTrigger(RebalanceTrigger):
    """
    Portfolio-wide trigger on a fixed trading day of the month.

    Trading days are counted within the month (weekends and holidays are
    skipped), so trigger_day_of_month=1 means the first session of the
    month. An empty portfolio also acts immediately.
    """

    def __init__(self, trigger_day_of_month: int = 1):
        if trigger_day_of_month < 1:
            raise ValueError(
                f"Invalid trigger day of month: {trigger_day_of_month} (must be >= 1)"
            )
        self.trigger_day_of_month = trigger_day_of_month

    def describe(self) -> str:
        return f"REBALANCING MONTHLY ON TRADING DAY {self.trigger_day_of_month}"

    def effective_trigger_day(self, trading_day: TradingDay) -> int:
        """Trigger day, clamped to the last session in short months."""
        return min(self.trigger_day_of_month, trading_day.days_in_month)

    def is_trigger_day(self, trading_day: TradingDay) -> bool:
        return trading_day.day_of_month == self.effective_trigger_day(trading_day)

    def trading_days_until_rebalance(self, trading_day: TradingDay) -> int:
        """
        Trading days until the next trigger day.

        Counts into next month when this month's trigger day has passed,
        assuming the trigger day falls at the same offset next month.
        In months with fewer sessions than trigger_day_of_month the last
        session is the trigger day.
        """
        tdm = trading_day.day_of_month
        trigger_day = self.effective_trigger_day(trading_day)
        if tdm == trigger_day:
            return 0
        if tdm < trigger_day:
            return trigger_day - tdm
        return trading_day.days_in_month - tdm + self.trigger_day_of_month

    def evaluate(
        self,
        instruments: Sequence[InstrumentState],
        trading_day: TradingDay
    ) -> Dict[str, RebalanceState]:
        portfolio_empty = all(instrument.current_position == 0 for instrument in instruments)

        if self.is_trigger_day(trading_day):
            logger.info(
                f"{trading_day.date}: trading day {trading_day.day_of_month} of month "
                f"-> portfolio ACT_TODAY"
            )
            state = RebalanceState.ACT_TODAY
        elif portfolio_empty:
            logger.info(f"{trading_day.date}: no open or pending positions -> portfolio ACT_TODAY")
            state = RebalanceState.ACT_TODAY
        else:
            logger.debug(
                f"{trading_day.date}: trading day {trading_day.day_of_month}, "
                f"{self.trading_days_until_rebalance(trading_day)} days until rebalance -> IDLE"
            )
            state = RebalanceState.IDLE

        return {instrument.symbol: state for instrument in instruments}


def create_trigger(policy: RebalancePolicy) -> RebalanceTrigger:
    """
    Build the trigger for a configured rebalance policy.

    Args:
        policy: TrackingErrorPolicy or CalendarPolicy

    Returns:
        Matching RebalanceTrigger implementation

    Raises:
        ValueError: If policy type is unknown
    """
    if isinstance(policy, TrackingErrorPolicy):
        return TrackingErrorTrigger(threshold=policy.threshold)
    if isinstance(policy, CalendarPolicy):
        return CalendarTrigger(trigger_day_of_month=policy.trigger_day_of_month)

    raise ValueError(f"Unknown rebalance policy: {policy!r}")
