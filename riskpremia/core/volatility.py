"""
Volatility estimation from daily closing prices.

Annualized volatility is the population standard deviation of the most
recent N one-period simple returns, scaled by sqrt(periods per year).

Example:
    from riskpremia.core.volatility import VolatilityEstimator

    estimator = VolatilityEstimator(lookback_window=90)
    if estimator.has_sufficient_history(closes):
        ann_vol = estimator.estimate(closes)
"""
import logging
from typing import List, Union

import numpy as np
import pandas as pd

logger = logging.getLogger('CORE.VOLATILITY')

TRADING_DAYS_PER_YEAR = 252


def _to_series(data: Union[pd.Series, List[float]]) -> pd.Series:
    """
    Convert input data to a float pandas Series.

    Args:
        data: Price data as Series or list

    Returns:
        pandas Series with float values
    """
    if isinstance(data, pd.Series):
        return data.astype(float).reset_index(drop=True)

    return pd.Series(data, dtype=float)


def simple_returns(prices: Union[pd.Series, List]) -> pd.Series:
    """
    One-period simple returns r_t = p_t / p_(t-1) - 1.

    Args:
        prices: Closing prices, oldest first

    Returns:
        Series one element shorter than prices

    Example:
        simple_returns([100, 110, 99])
        # Returns: [0.10, -0.10]
    """
    series = _to_series(prices)
    return series.pct_change().iloc[1:].reset_index(drop=True)


class VolatilityEstimator:
    """
    Annualized volatility over a fixed lookback of daily returns.

    Uses the population variance (second central moment, ddof=0) of the
    last `lookback_window` returns.
    """

    def __init__(
        self,
        lookback_window: int = 90,
        annualization_factor: int = TRADING_DAYS_PER_YEAR
    ):
        """
        Args:
            lookback_window: Number of returns in the estimation window
            annualization_factor: Periods per year (252 trading days)

        Raises:
            ValueError: If lookback_window or annualization_factor <= 0
        """
        if lookback_window <= 0:
            raise ValueError(f"Invalid lookback window: {lookback_window} (must be > 0)")
        if annualization_factor <= 0:
            raise ValueError(
                f"Invalid annualization factor: {annualization_factor} (must be > 0)"
            )

        self.lookback_window = lookback_window
        self.annualization_factor = annualization_factor

    @property
    def min_prices(self) -> int:
        """Closes required before the estimate is meaningful."""
        return self.lookback_window + 1

    def has_sufficient_history(self, prices: Union[pd.Series, List]) -> bool:
        """Return True once at least `lookback_window` returns exist."""
        return len(prices) >= self.min_prices

    def estimate(self, prices: Union[pd.Series, List]) -> float:
        """
        Annualized volatility of the most recent returns.

        Args:
            prices: Closing prices, oldest first

        Returns:
            sqrt(variance * annualization_factor), or 0.0 during warm-up
            (fewer than lookback_window returns available)
        """
        if not self.has_sufficient_history(prices):
            logger.debug(
                f"Warm-up: {len(prices)} closes < {self.min_prices} required"
            )
            return 0.0

        window = simple_returns(prices).iloc[-self.lookback_window:]
        variance = float(window.var(ddof=0))

        ann_vol = float(np.sqrt(variance * self.annualization_factor))
        logger.debug(
            f"variance={variance:.8f} over {len(window)} returns -> ann_vol={ann_vol:.4f}"
        )
        return ann_vol
