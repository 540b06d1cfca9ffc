"""
Market Calendar Module

Purpose:
    NYSE trading-day validation and within-month trading-day counting
    for calendar rebalancing. Weekends and exchange holidays are skipped.

Dependencies:
    - pandas-market-calendars>=4.0.0

Usage:
    from riskpremia.live.market_calendar import build_trading_day

    trading_day = build_trading_day(date(2025, 11, 28))
    trading_day.day_of_month   # 19
    trading_day.days_in_month  # 19
"""

import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Union
from zoneinfo import ZoneInfo

import pandas_market_calendars as mcal

from riskpremia.core.models import TradingDay

logger = logging.getLogger('LIVE.MARKET_CALENDAR')

ET = ZoneInfo("America/New_York")

# Cache NYSE calendar at module level for efficiency
_NYSE_CALENDAR = mcal.get_calendar('NYSE')

DateLike = Union[date, datetime]


def _as_date(value: Optional[DateLike]) -> date:
    if value is None:
        return datetime.now(ET).date()
    if isinstance(value, datetime):
        return value.date()
    return value


def _month_bounds(check_date: date) -> tuple:
    start_date = check_date.replace(day=1)
    if check_date.month == 12:
        next_month = check_date.replace(year=check_date.year + 1, month=1, day=1)
    else:
        next_month = check_date.replace(month=check_date.month + 1, day=1)
    return start_date, next_month - timedelta(days=1)


def get_trading_days_between(start: date, end: date) -> List[date]:
    """
    Get all NYSE trading days in a date range (inclusive).

    Examples:
        >>> get_trading_days_between(date(2025, 11, 24), date(2025, 11, 28))
        [date(2025, 11, 24), date(2025, 11, 25), date(2025, 11, 26), date(2025, 11, 28)]
        # Note: Nov 27 (Thanksgiving) is excluded
    """
    schedule = _NYSE_CALENDAR.schedule(start_date=start, end_date=end)
    trading_days = [d.date() for d in schedule.index]

    logger.debug(f"get_trading_days_between({start}, {end}): {len(trading_days)} trading days")
    return trading_days


def is_trading_day(check_date: Optional[DateLike] = None) -> bool:
    """
    Check if given date is a trading day on NYSE.

    Args:
        check_date: Date to check (default: today in Eastern Time)

    Returns:
        True if trading day, False if weekend/holiday

    Examples:
        >>> is_trading_day(date(2025, 11, 27))  # Thanksgiving
        False
        >>> is_trading_day(date(2025, 11, 24))  # Monday
        True
    """
    check_date = _as_date(check_date)
    is_trading = check_date in get_trading_days_between(check_date, check_date)

    logger.debug(f"is_trading_day({check_date}): {is_trading}")
    return is_trading


def get_trading_days_in_month(check_date: Optional[DateLike] = None) -> List[date]:
    """All NYSE trading days in the month containing check_date."""
    check_date = _as_date(check_date)
    start_date, end_date = _month_bounds(check_date)
    return get_trading_days_between(start_date, end_date)


def trading_day_of_month(check_date: Optional[DateLike] = None) -> int:
    """
    1-based trading-day number of check_date within its month.

    Args:
        check_date: Trading date (default: today in Eastern Time)

    Returns:
        1 for the first session of the month, 2 for the second, ...

    Raises:
        ValueError: If check_date is not a trading day

    Examples:
        >>> trading_day_of_month(date(2025, 11, 3))  # Nov 1-2 is a weekend
        1
    """
    check_date = _as_date(check_date)
    days = get_trading_days_in_month(check_date)

    if check_date not in days:
        raise ValueError(f"{check_date} is not a trading day (weekend/holiday)")

    return days.index(check_date) + 1


def trading_days_in_month(check_date: Optional[DateLike] = None) -> int:
    """Number of NYSE trading days in the month containing check_date."""
    return len(get_trading_days_in_month(check_date))


def build_trading_day(check_date: Optional[DateLike] = None) -> TradingDay:
    """
    Calendar facts the core needs for check_date.

    Raises:
        ValueError: If check_date is not a trading day
    """
    check_date = _as_date(check_date)
    days = get_trading_days_in_month(check_date)

    if check_date not in days:
        raise ValueError(f"{check_date} is not a trading day (weekend/holiday)")

    trading_day = TradingDay(
        date=check_date,
        day_of_month=days.index(check_date) + 1,
        days_in_month=len(days),
    )
    logger.info(
        f"{check_date}: trading day {trading_day.day_of_month} of {trading_day.days_in_month}"
    )
    return trading_day


def get_previous_trading_day(check_date: Optional[DateLike] = None) -> date:
    """
    Get previous trading day before given date.

    Raises:
        ValueError: If no trading day found in previous 30 days

    Examples:
        >>> get_previous_trading_day(date(2025, 11, 28))  # Day after Thanksgiving
        date(2025, 11, 26)
    """
    check_date = _as_date(check_date)
    days = get_trading_days_between(check_date - timedelta(days=30), check_date - timedelta(days=1))

    if not days:
        raise ValueError(f"No trading day found in 30 days before {check_date}")

    return days[-1]


def get_last_trading_day(check_date: Optional[DateLike] = None) -> date:
    """check_date itself if it is a trading day, otherwise the one before."""
    check_date = _as_date(check_date)
    if is_trading_day(check_date):
        return check_date
    return get_previous_trading_day(check_date)
