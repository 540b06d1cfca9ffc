"""Data fetchers package."""
from riskpremia.data.fetchers.base import DataFetcher
from riskpremia.data.fetchers.yahoo import YahooDataFetcher

__all__ = ['DataFetcher', 'YahooDataFetcher']
