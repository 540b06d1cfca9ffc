"""
CSV file data handler for locally stored daily history.

Reads <data_dir>/<SYMBOL>.csv files with flexible column detection and
returns the same normalized frame as the online fetchers.
"""
from datetime import date
from pathlib import Path
from typing import Dict, Optional
import logging

import pandas as pd

from riskpremia.data.fetchers.base import BAR_COLUMNS, DataFetcher, normalize_bars

logger = logging.getLogger('DATA.CSV')


class CSVDataHandler(DataFetcher):
    """
    CSV daily bar source with flexible header detection.

    Supports common CSV formats:
    - Date,Open,High,Low,Close,Volume
    - Timestamp,OHLCV
    - Stooq/Alpha Vantage exports (lower-case headers)

    Examples:
        >>> handler = CSVDataHandler(data_dir='data/')
        >>> df = handler.fetch_daily_bars('GLD', date(2020, 1, 1), date(2020, 7, 31))
    """

    COMMON_FORMATS = {
        'standard': {
            'date': ['Date', 'date', 'Datetime', 'datetime', 'Timestamp', 'timestamp'],
            'open': ['Open', 'open', 'OPEN'],
            'high': ['High', 'high', 'HIGH'],
            'low': ['Low', 'low', 'LOW'],
            'close': ['Close', 'close', 'CLOSE', 'Adj Close'],
            'volume': ['Volume', 'volume', 'VOLUME', 'Vol']
        }
    }

    def __init__(self, data_dir: str, column_mapping: Optional[Dict[str, str]] = None):
        """
        Initialize CSV data handler.

        Args:
            data_dir: Directory holding one <SYMBOL>.csv per instrument
            column_mapping: Custom {file column: standard column} mapping

        Raises:
            FileNotFoundError: If data_dir does not exist
        """
        super().__init__()
        self.data_dir = Path(data_dir)
        self.column_mapping = column_mapping or {}

        if not self.data_dir.is_dir():
            raise FileNotFoundError(f"Data directory not found: {self.data_dir}")

        logger.info(f"Initialized CSV handler for {self.data_dir}")

    def file_path(self, symbol: str) -> Path:
        return self.data_dir / f"{symbol.upper()}.csv"

    def _detect_format(self, columns) -> Dict[str, str]:
        """
        Map file columns onto standard names.

        Raises:
            ValueError: If a required column cannot be found
        """
        mapping = {}
        for standard, candidates in self.COMMON_FORMATS['standard'].items():
            for candidate in candidates:
                if candidate in columns:
                    mapping[candidate] = standard
                    break

        found = set(mapping.values())
        missing = [col for col in BAR_COLUMNS if col != 'volume' and col not in found]
        if missing:
            raise ValueError(f"Cannot detect CSV format, missing columns: {missing}")

        return mapping

    def load(self, symbol: str) -> pd.DataFrame:
        """
        Load the full history for a symbol.

        Raises:
            FileNotFoundError: If the symbol's CSV is missing
            ValueError: If the CSV format cannot be detected
        """
        path = self.file_path(symbol)
        if not path.exists():
            raise FileNotFoundError(f"CSV file not found: {path}")

        raw = pd.read_csv(path)
        mapping = self.column_mapping or self._detect_format(raw.columns)
        renamed = raw.rename(columns=mapping)
        df = normalize_bars(renamed[list(mapping.values())])

        logger.info(f"Loaded {len(df)} bars for {symbol.upper()} from {path}")
        return df

    def fetch_daily_bars(self, symbol: str, start_date: date, end_date: date) -> pd.DataFrame:
        self.validate_parameters(symbol, start_date, end_date)

        df = self.load(symbol)
        mask = (df['date'] >= start_date) & (df['date'] <= end_date)
        return df.loc[mask].reset_index(drop=True)
