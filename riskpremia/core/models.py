"""
Value objects shared by the core pipeline.

InstrumentState is rebuilt from scratch every trading day; nothing in
here survives between evaluations.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Optional

import pandas as pd


@dataclass(frozen=True)
class TradingDay:
    """
    Calendar facts about the evaluation date.

    Attributes:
        date: Evaluation (trading) date
        day_of_month: 1-based trading-day number within the month
            (weekends and exchange holidays are not counted)
        days_in_month: Total trading days in the month
    """
    date: date
    day_of_month: int
    days_in_month: int

    def __post_init__(self):
        if self.day_of_month < 1:
            raise ValueError(f"Invalid trading day of month: {self.day_of_month} (must be >= 1)")
        if self.days_in_month < self.day_of_month:
            raise ValueError(
                f"Trading day {self.day_of_month} exceeds {self.days_in_month} "
                f"trading days in month"
            )


@dataclass(frozen=True)
class Bar:
    """Daily OHLC bar for the evaluation date."""
    open: float
    high: float
    low: float
    close: float


@dataclass
class InstrumentState:
    """
    Per-instrument state for one evaluation cycle.

    Attributes:
        symbol: Ticker symbol
        prices: Daily closes, oldest first
        bar: Latest OHLC bar (the evaluation day)
        returns: One-period simple returns derived from prices
        annualized_volatility: Annualized volatility estimate (>= 0)
        theoretical_size: Inverse-volatility weight before the leverage cap
        constrained_size: Weight after uniform leverage scaling
        target_position: Whole shares wanted today
        current_position: Open + pending shares reported by the broker
    """
    symbol: str
    prices: pd.Series
    bar: Bar
    returns: pd.Series = field(default_factory=lambda: pd.Series(dtype=float))
    annualized_volatility: float = 0.0
    theoretical_size: float = 0.0
    constrained_size: float = 0.0
    target_position: int = 0
    current_position: int = 0

    @property
    def price(self) -> float:
        """Reference (close) price used for sizing."""
        return self.bar.close

    @property
    def position_delta(self) -> int:
        """Signed shares needed to reach target."""
        return self.target_position - self.current_position

    @property
    def exposure(self) -> float:
        """Notional value of the current holding at today's close."""
        return self.current_position * self.bar.close


@dataclass(frozen=True)
class TradeInstruction:
    """
    Executable order produced when a rebalance is required.

    Positive signed_quantity buys, negative sells.
    """
    symbol: str
    signed_quantity: int
    estimated_commission: float

    @property
    def side(self) -> str:
        return "BUY" if self.signed_quantity > 0 else "SELL"

    @property
    def quantity(self) -> int:
        return abs(self.signed_quantity)

    @property
    def total_commission(self) -> float:
        """Estimated ticket cost (per-share rate times quantity)."""
        return self.estimated_commission * self.quantity

    def __str__(self) -> str:
        return (
            f"{self.side} {self.quantity} {self.symbol} "
            f"(est. commission ${self.estimated_commission:.4f}/share)"
        )
