"""
Unit tests for VolatilityEstimator.

Annualized volatility is the population standard deviation of the last
N simple returns times sqrt(252).
"""
import numpy as np
import pandas as pd
import pytest

from riskpremia.core.volatility import VolatilityEstimator, simple_returns


class TestSimpleReturns:
    """Test suite for simple_returns."""

    def test_simple_returns_basic(self):
        """Test r_t = p_t / p_(t-1) - 1."""
        returns = simple_returns([100, 110, 99])
        assert list(returns) == pytest.approx([0.10, -0.10])

    def test_simple_returns_length(self):
        """Test returns are one element shorter than prices."""
        assert len(simple_returns(pd.Series([1.0, 2.0, 3.0, 4.0]))) == 3


class TestVolatilityEstimator:
    """Test suite for VolatilityEstimator class."""

    def test_recovers_known_volatility(self, make_bars):
        """Test alternating +a/-a returns give ann_vol = a * sqrt(252)."""
        closes = make_bars(ann_vol=0.15)['close']
        estimator = VolatilityEstimator(lookback_window=90)
        assert estimator.estimate(closes) == pytest.approx(0.15, rel=1e-6)

    def test_uses_population_variance(self):
        """Test ddof=0 over the lookback window."""
        rng = np.random.default_rng(7)
        closes = pd.Series(100 * np.cumprod(1 + rng.normal(0, 0.01, 31)))
        returns = closes.pct_change().iloc[1:]

        estimator = VolatilityEstimator(lookback_window=30)
        expected = np.std(returns.values, ddof=0) * np.sqrt(252)
        assert estimator.estimate(closes) == pytest.approx(expected)

    def test_only_last_window_counts(self, make_bars):
        """Test older history outside the window does not change the estimate."""
        recent = make_bars(ann_vol=0.12)['close']
        wild = pd.Series([100.0, 300.0, 50.0, 400.0, 20.0])
        combined = pd.concat([wild * recent.iloc[0] / 20.0, recent], ignore_index=True)

        estimator = VolatilityEstimator(lookback_window=90)
        assert estimator.estimate(combined) == pytest.approx(estimator.estimate(recent))

    def test_constant_prices_zero_volatility(self):
        """Test flat prices give zero volatility."""
        estimator = VolatilityEstimator(lookback_window=10)
        assert estimator.estimate([50.0] * 11) == 0.0

    def test_warmup_returns_zero(self, make_bars):
        """Test fewer than lookback returns gives 0.0."""
        closes = make_bars(ann_vol=0.15, n_prices=90)['close']
        estimator = VolatilityEstimator(lookback_window=90)

        assert estimator.has_sufficient_history(closes) is False
        assert estimator.estimate(closes) == 0.0

    def test_sufficient_history_boundary(self, make_bars):
        """Test lookback + 1 closes is the first usable day."""
        estimator = VolatilityEstimator(lookback_window=90)
        assert estimator.min_prices == 91
        assert estimator.has_sufficient_history(make_bars(n_prices=91)['close']) is True

    def test_non_negative(self, make_bars):
        """Test estimate is never negative."""
        estimator = VolatilityEstimator(lookback_window=90)
        for vol in [0.0, 0.05, 0.30]:
            assert estimator.estimate(make_bars(ann_vol=vol)['close']) >= 0.0

    def test_invalid_lookback(self):
        """Test error handling for invalid lookback window."""
        with pytest.raises(ValueError, match="Invalid lookback window"):
            VolatilityEstimator(lookback_window=0)

    def test_invalid_annualization_factor(self):
        """Test error handling for invalid annualization factor."""
        with pytest.raises(ValueError, match="Invalid annualization factor"):
            VolatilityEstimator(lookback_window=90, annualization_factor=-1)
