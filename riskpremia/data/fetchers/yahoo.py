"""
Yahoo Finance data fetcher implementation.

Provides free daily history for the portfolio ETFs using the yfinance
library. No authentication required.

Example:
    from riskpremia.data.fetchers.yahoo import YahooDataFetcher
    from datetime import date

    fetcher = YahooDataFetcher()
    df = fetcher.fetch_daily_bars('GLD', date(2020, 1, 1), date(2020, 7, 31))
"""
import logging
import time
from datetime import date, timedelta

import pandas as pd
import yfinance as yf
from requests.exceptions import ConnectionError, HTTPError, Timeout

from riskpremia.data.fetchers.base import BAR_COLUMNS, DataFetcher, normalize_bars

logger = logging.getLogger('DATA.YAHOO')


class YahooDataFetcher(DataFetcher):
    """
    Yahoo Finance daily bar fetcher using yfinance.

    Retries with exponential backoff live here; the core never retries.
    """

    def __init__(self, rate_limit_delay: float = 0.5, max_retries: int = 3):
        """
        Initialize Yahoo Finance fetcher.

        Args:
            rate_limit_delay: Delay between requests in seconds (default 0.5s = 2 req/s)
            max_retries: Attempts per symbol on transient errors
        """
        super().__init__()
        self.rate_limit_delay = rate_limit_delay
        self.max_retries = max_retries
        self.last_request_time = 0.0

    def fetch_daily_bars(
        self,
        symbol: str,
        start_date: date,
        end_date: date,
    ) -> pd.DataFrame:
        """
        Fetch daily bars from Yahoo Finance.

        Args:
            symbol: Ticker symbol (e.g., 'GLD')
            start_date: First date (inclusive)
            end_date: Last date (inclusive)

        Returns:
            Normalized DataFrame with BAR_COLUMNS, oldest first

        Raises:
            ValueError: If symbol is invalid or dates are malformed
            ConnectionError: If Yahoo Finance API is unreachable
        """
        self.validate_parameters(symbol, start_date, end_date)

        symbol = symbol.upper()
        logger.info(f"Fetching {symbol} daily bars from Yahoo Finance ({start_date} to {end_date})")

        self._apply_rate_limit()

        try:
            df = self._fetch_with_retry(symbol, start_date, end_date)

        except HTTPError as e:
            if e.response is not None and e.response.status_code == 404:
                raise ValueError(f"Symbol {symbol} not found on Yahoo Finance")
            logger.error(f"HTTP error fetching {symbol}: {e}")
            raise ConnectionError(f"Yahoo Finance API error: {e}")

        except (Timeout, ConnectionError) as e:
            logger.error(f"Connection error fetching {symbol}: {e}")
            raise ConnectionError(f"Failed to connect to Yahoo Finance: {e}")

        logger.info(f"Retrieved {len(df)} bars for {symbol}")
        return df

    def _fetch_with_retry(self, symbol: str, start_date: date, end_date: date) -> pd.DataFrame:
        """
        Fetch bars with retry logic for transient errors.

        Raises:
            ConnectionError: If all retry attempts fail
        """
        for attempt in range(self.max_retries):
            try:
                ticker = yf.Ticker(symbol)
                # yfinance treats `end` as exclusive
                raw = ticker.history(
                    start=start_date,
                    end=end_date + timedelta(days=1),
                    interval='1d',
                    auto_adjust=False,
                    actions=False,
                )

                if raw.empty:
                    logger.warning(f"No data returned for {symbol}")
                    return pd.DataFrame(columns=BAR_COLUMNS)

                return self._convert_to_frame(raw)

            except (Timeout, ConnectionError) as e:
                if attempt < self.max_retries - 1:
                    wait_time = 2 ** attempt  # Exponential backoff
                    logger.warning(
                        f"Attempt {attempt + 1} failed for {symbol}, "
                        f"retrying in {wait_time}s: {e}"
                    )
                    time.sleep(wait_time)
                else:
                    logger.error(f"All {self.max_retries} attempts failed for {symbol}")
                    raise

        return pd.DataFrame(columns=BAR_COLUMNS)

    def _apply_rate_limit(self):
        """Sleep so requests are at least rate_limit_delay apart."""
        time_since_last_request = time.time() - self.last_request_time

        if time_since_last_request < self.rate_limit_delay:
            sleep_time = self.rate_limit_delay - time_since_last_request
            logger.debug(f"Rate limiting: sleeping {sleep_time:.2f}s")
            time.sleep(sleep_time)

        self.last_request_time = time.time()

    @staticmethod
    def _convert_to_frame(raw: pd.DataFrame) -> pd.DataFrame:
        """Convert a yfinance history frame (DatetimeIndex, title-case columns)."""
        df = raw.reset_index()
        df = df.rename(columns={df.columns[0]: 'date'})
        return normalize_bars(df[['date', 'Open', 'High', 'Low', 'Close', 'Volume']])
