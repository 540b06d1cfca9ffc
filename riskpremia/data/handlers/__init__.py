"""File-based market data handlers."""
from riskpremia.data.handlers.csv import CSVDataHandler

__all__ = ['CSVDataHandler']
