"""
Live Trading Module

Purpose:
    Daily harness around the core engine: trading calendar, position
    providers, order submitters and the daily runner.

Modules:
    - mode: RunPhase lifecycle enumeration
    - market_calendar: NYSE trading-day counting
    - positions: Current position providers
    - executor_router: Order submitter interface and factory
    - dry_run_executor: Hypothetical order logging (no real orders)
    - daily_runner: One trading day end to end

Usage:
    from riskpremia.live.daily_runner import DailyRebalanceRunner

    runner = DailyRebalanceRunner(config, fetcher, positions, phase=RunPhase.PREVIEW)
    decision = runner.run_day(date(2020, 7, 30))
"""

__version__ = '1.0.0'

from riskpremia.live.mode import RunPhase
from riskpremia.live.exceptions import (
    CriticalFailure,
    MissingMarketData,
    StaleMarketData,
    OrderSubmissionError,
)

__all__ = [
    'RunPhase',
    'CriticalFailure',
    'MissingMarketData',
    'StaleMarketData',
    'OrderSubmissionError',
]
