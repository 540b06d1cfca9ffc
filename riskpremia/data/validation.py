"""
Pre-flight checks on the day's market data.

The core assumes complete, sanitized inputs. These checks run in the
harness first and abort the day instead of feeding the core bad data.
"""
import logging
from datetime import date
from typing import Dict, List, Mapping

import pandas as pd

from riskpremia.live.exceptions import MissingMarketData, StaleMarketData

logger = logging.getLogger('DATA.VALIDATION')


def validate_market_data(
    market_data: Mapping[str, pd.DataFrame],
    symbols: List[str],
    as_of: date
) -> Dict[str, pd.DataFrame]:
    """
    Check every symbol has bars up to and including as_of.

    Bars dated after as_of are dropped so the last row is the
    evaluation day.

    Args:
        market_data: {symbol: DataFrame} with a `date` column
        symbols: Configured instrument symbols
        as_of: Evaluation date

    Returns:
        {symbol: DataFrame} trimmed to as_of

    Raises:
        MissingMarketData: If a symbol has no data at all
        StaleMarketData: If a symbol's latest bar is before as_of
    """
    trimmed = {}

    for symbol in symbols:
        df = market_data.get(symbol)
        if df is None or df.empty:
            raise MissingMarketData(f"No market data for {symbol}")

        df = df[df['date'] <= as_of].reset_index(drop=True)
        if df.empty:
            raise MissingMarketData(f"No bars for {symbol} on or before {as_of}")

        latest = df['date'].iloc[-1]
        if latest < as_of:
            raise StaleMarketData(f"Latest {symbol} bar is {latest}, expected {as_of}")

        trimmed[symbol] = df
        logger.debug(f"{symbol}: {len(df)} bars through {latest}")

    return trimmed
