"""
Global pytest fixtures for the Risk Premia test suite.

Provides synthetic daily OHLC history with a known annualized volatility,
portfolio configuration factories, and the reference sizing scenario
(GLD/TLT/VTI at 15%/12%/18% volatility).
"""
from datetime import date

import numpy as np
import pandas as pd
import pytest

from riskpremia.core.models import TradingDay
from riskpremia.utils.config import PortfolioConfig, build_config

SCENARIO_END = date(2020, 7, 30)
SCENARIO_VOLS = {'GLD': 0.15, 'TLT': 0.12, 'VTI': 0.18}
SCENARIO_PRICES = {'GLD': 183.76, 'TLT': 171.11, 'VTI': 164.68}


def build_bars(
    ann_vol: float = 0.15,
    last_close: float = 100.0,
    n_prices: int = 91,
    end: date = SCENARIO_END,
) -> pd.DataFrame:
    """
    Daily bars whose returns alternate +a, -a with a = ann_vol / sqrt(252).

    Any even-length window of those returns has mean 0 and population
    standard deviation a, so the estimator recovers ann_vol exactly.
    Closes are scaled so the last close equals last_close.
    """
    a = ann_vol / np.sqrt(252)
    returns = np.array([a if i % 2 == 0 else -a for i in range(n_prices - 1)])
    closes = np.concatenate([[1.0], np.cumprod(1 + returns)])
    closes = closes * last_close / closes[-1]
    closes[-1] = last_close

    dates = [d.date() for d in pd.bdate_range(end=end, periods=n_prices)]
    return pd.DataFrame({
        'date': dates,
        'open': closes,
        'high': closes * 1.01,
        'low': closes * 0.99,
        'close': closes,
        'volume': 1_000_000,
    })


@pytest.fixture
def make_bars():
    """Factory for synthetic daily bars (see build_bars)."""
    return build_bars


@pytest.fixture
def scenario_market_data():
    """91 closes per instrument: exactly one full 90-return window."""
    return {
        symbol: build_bars(SCENARIO_VOLS[symbol], SCENARIO_PRICES[symbol])
        for symbol in SCENARIO_VOLS
    }


@pytest.fixture
def config_factory():
    """Build a PortfolioConfig from keyword overrides."""
    def _factory(**overrides) -> PortfolioConfig:
        data = {'capital_exposure': 50000.0}
        data.update(overrides)
        return build_config(data)
    return _factory


@pytest.fixture
def scenario_config(config_factory):
    """Default GLD/TLT/VTI config with $50,000 exposure, 10% tracking error."""
    return config_factory()


@pytest.fixture
def trading_day():
    """2020-07-30: 21st of 22 trading days in July 2020."""
    return TradingDay(date=SCENARIO_END, day_of_month=21, days_in_month=22)
