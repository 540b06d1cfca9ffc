"""
Unit tests for core value objects.
"""
from datetime import date

import pandas as pd
import pytest

from riskpremia.core.models import Bar, InstrumentState, TradeInstruction, TradingDay


class TestTradingDay:
    """Test suite for TradingDay validation."""

    def test_valid(self):
        day = TradingDay(date=date(2025, 11, 28), day_of_month=19, days_in_month=19)
        assert day.day_of_month == 19

    def test_day_of_month_starts_at_one(self):
        with pytest.raises(ValueError, match="Invalid trading day of month"):
            TradingDay(date=date(2025, 11, 3), day_of_month=0, days_in_month=19)

    def test_day_beyond_month(self):
        with pytest.raises(ValueError, match="exceeds 19 trading days"):
            TradingDay(date=date(2025, 11, 28), day_of_month=20, days_in_month=19)


class TestInstrumentState:
    """Test suite for InstrumentState derived values."""

    @pytest.fixture
    def instrument(self):
        return InstrumentState(
            symbol='TLT',
            prices=pd.Series([170.0, 171.11]),
            bar=Bar(open=170.5, high=172.0, low=170.1, close=171.11),
            target_position=118,
            current_position=100,
        )

    def test_price_is_close(self, instrument):
        assert instrument.price == 171.11

    def test_position_delta(self, instrument):
        assert instrument.position_delta == 18

    def test_exposure(self, instrument):
        assert instrument.exposure == pytest.approx(17111.0)

    def test_defaults_empty(self):
        """Test a fresh state holds nothing and sizes nothing."""
        state = InstrumentState(symbol='GLD', prices=pd.Series([1.0]), bar=Bar(1.0, 1.0, 1.0, 1.0))
        assert state.target_position == 0
        assert state.current_position == 0
        assert state.annualized_volatility == 0.0
        assert state.returns.empty


class TestTradeInstruction:
    """Test suite for TradeInstruction."""

    def test_sell_side(self):
        instruction = TradeInstruction(symbol='VTI', signed_quantity=-5, estimated_commission=0.2)
        assert instruction.side == 'SELL'
        assert instruction.quantity == 5
        assert instruction.total_commission == pytest.approx(1.0)

    def test_immutable(self):
        instruction = TradeInstruction(symbol='VTI', signed_quantity=5, estimated_commission=0.2)
        with pytest.raises(AttributeError):
            instruction.signed_quantity = 10
