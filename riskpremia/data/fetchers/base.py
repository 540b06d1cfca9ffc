"""
Base interface for data fetchers.

Defines the contract that all daily market data sources must implement.
Data fetchers retrieve OHLC history from external sources (APIs, files)
and hand it to the daily runner as normalized DataFrames.

Example:
    from riskpremia.data.fetchers.base import DataFetcher

    class MyDataFetcher(DataFetcher):
        def fetch_daily_bars(self, symbol, start_date, end_date):
            # Implementation here
            return df
"""
from abc import ABC, abstractmethod
from datetime import date
from typing import Dict, List

import pandas as pd

BAR_COLUMNS = ['date', 'open', 'high', 'low', 'close', 'volume']


class DataFetcher(ABC):
    """
    Abstract base class for market data fetchers.

    Subclasses must implement:
        - fetch_daily_bars(): Retrieve daily OHLCV history for one symbol
    """

    @abstractmethod
    def fetch_daily_bars(
        self,
        symbol: str,
        start_date: date,
        end_date: date,
    ) -> pd.DataFrame:
        """
        Fetch daily bars.

        Args:
            symbol: Ticker symbol (e.g., 'GLD', 'TLT')
            start_date: Start of date range (inclusive)
            end_date: End of date range (inclusive)

        Returns:
            DataFrame with BAR_COLUMNS, one row per trading day,
            oldest first; `date` holds datetime.date values

        Raises:
            ValueError: If parameters are invalid
            ConnectionError: If the source is unreachable
        """
        raise NotImplementedError("Subclasses must implement fetch_daily_bars()")

    def fetch_many(
        self,
        symbols: List[str],
        start_date: date,
        end_date: date,
    ) -> Dict[str, pd.DataFrame]:
        """Fetch daily bars for several symbols: {symbol: DataFrame}."""
        return {
            symbol: self.fetch_daily_bars(symbol, start_date, end_date)
            for symbol in symbols
        }

    def validate_parameters(self, symbol: str, start_date: date, end_date: date):
        """
        Validate fetch parameters.

        Raises:
            ValueError: If parameters are invalid
        """
        if not symbol or not symbol.strip():
            raise ValueError("Symbol cannot be empty")

        if start_date >= end_date:
            raise ValueError(
                f"Start date ({start_date}) must be before end date ({end_date})"
            )


def normalize_bars(df: pd.DataFrame) -> pd.DataFrame:
    """
    Normalize a raw OHLCV frame to BAR_COLUMNS, sorted oldest first.

    Drops rows with missing or non-positive closes and duplicate dates
    (keeping the last).
    """
    out = df.copy()
    out.columns = [str(c).strip().lower() for c in out.columns]

    missing = [col for col in BAR_COLUMNS if col != 'volume' and col not in out.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    if 'volume' not in out.columns:
        out['volume'] = 0

    out['date'] = pd.to_datetime(out['date']).dt.date
    for col in ['open', 'high', 'low', 'close']:
        out[col] = pd.to_numeric(out[col], errors='coerce').astype(float)
    out['volume'] = pd.to_numeric(out['volume'], errors='coerce').fillna(0).astype(int)

    out = out.dropna(subset=['close'])
    out = out[out['close'] > 0]
    out = out.drop_duplicates(subset='date', keep='last').sort_values('date')

    return out[BAR_COLUMNS].reset_index(drop=True)
