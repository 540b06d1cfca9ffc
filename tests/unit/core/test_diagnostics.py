"""
Unit tests for DailyDiagnosticsRecord.

Tests record assembly from instrument state and CSV cell formatting.
"""
from datetime import date

import pandas as pd
import pytest

from riskpremia.core.diagnostics import (
    DIAGNOSTICS_COLUMNS,
    DailyDiagnosticsRecord,
    build_diagnostics_record,
)
from riskpremia.core.models import Bar, InstrumentState, TradingDay
from riskpremia.core.rebalance import CalendarTrigger, TrackingErrorTrigger


@pytest.fixture
def instrument():
    return InstrumentState(
        symbol='GLD',
        prices=pd.Series([180.0, 183.76]),
        bar=Bar(open=182.5, high=184.1, low=181.9, close=183.76),
        annualized_volatility=0.1512,
        target_position=88,
        current_position=80,
    )


@pytest.fixture
def day():
    return TradingDay(date=date(2020, 7, 30), day_of_month=21, days_in_month=22)


class TestBuildDiagnosticsRecord:
    """Test suite for build_diagnostics_record."""

    def test_tracking_error_mode(self, instrument, day):
        """Test fields projected from instrument state."""
        record = build_diagnostics_record(instrument, day, TrackingErrorTrigger(0.10), 0.10)

        assert record.date == date(2020, 7, 30)
        assert record.symbol == 'GLD'
        assert record.close == 183.76
        assert record.current_position == 80
        assert record.exposure == pytest.approx(80 * 183.76)
        assert record.target_position == 88
        assert record.position_delta == 8
        assert record.current_volatility == 0.1512
        assert record.target_volatility == 0.10
        assert record.trading_days_until_rebalance == 0
        assert record.tracking_error == pytest.approx(8 / 88)
        assert record.tracking_error_threshold == 0.10

    def test_calendar_mode(self, instrument, day):
        """Test calendar mode reports countdown and zero threshold."""
        record = build_diagnostics_record(instrument, day, CalendarTrigger(1), 0.10)

        assert record.trading_days_until_rebalance == 2
        assert record.tracking_error_threshold == 0.0

    def test_zero_target_tracking_error_missing(self, instrument, day):
        """Test zero target leaves tracking error undefined."""
        instrument.target_position = 0
        record = build_diagnostics_record(instrument, day, TrackingErrorTrigger(0.10), 0.10)

        assert record.tracking_error is None
        assert record.position_delta == -80


class TestDailyDiagnosticsRecord:
    """Test suite for CSV row rendering."""

    def test_as_row(self, instrument, day):
        """Test cells follow column order and precision."""
        record = build_diagnostics_record(instrument, day, TrackingErrorTrigger(0.10), 0.10)
        row = record.as_row()

        assert len(row) == len(DIAGNOSTICS_COLUMNS) == 15
        assert row == [
            '2020-07-30', 'GLD',
            '182.50000', '184.10000', '181.90000', '183.76000',
            '80', '14700.80', '88', '8',
            '0.151', '0.10', '0',
            '0.09', '0.10',
        ]

    def test_as_row_missing_tracking_error(self, day):
        """Test undefined tracking error renders as an empty cell."""
        record = DailyDiagnosticsRecord(
            date=day.date, symbol='VTI', open=1.0, high=1.0, low=1.0, close=1.0,
            current_position=0, exposure=0.0, target_position=0, position_delta=0,
            current_volatility=0.0, target_volatility=0.10, trading_days_until_rebalance=0,
            tracking_error=None, tracking_error_threshold=0.10,
        )
        assert record.as_row()[13] == ''
