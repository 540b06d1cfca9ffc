"""
Position Rounder - Convert sized allocations to whole shares.

This module ensures NO FRACTIONAL SHARES are allocated. All target
positions round DOWN so the portfolio never exceeds the exposure capital.
"""

import logging
from decimal import Decimal
from typing import Union

logger = logging.getLogger('CORE.POSITION_ROUNDER')

Number = Union[Decimal, float, int]


def _to_decimal(value: Number) -> Decimal:
    """Convert through str() so float noise does not leak into Decimal."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class PositionRounder:
    """
    Convert dollar allocations to whole shares (no fractional shares).

    CRITICAL: Always rounds DOWN. Never uses round() or ceil() - only
    int() on a non-negative Decimal, which truncates.
    """

    @staticmethod
    def round_to_shares(dollar_amount: Number, price: Number) -> int:
        """
        Convert dollar amount to whole shares (round down).

        Args:
            dollar_amount: Amount to allocate in dollars
            price: Current share price

        Returns:
            Number of whole shares (int, always rounded DOWN)

        Raises:
            ValueError: If price <= 0 or dollar_amount < 0

        Examples:
            >>> PositionRounder.round_to_shares(Decimal('10000'), Decimal('503.45'))
            19
        """
        dollar_amount = _to_decimal(dollar_amount)
        price = _to_decimal(price)

        if price <= 0:
            raise ValueError(f"Invalid price: {price} (must be > 0)")

        if dollar_amount < 0:
            raise ValueError(f"Invalid dollar amount: {dollar_amount} (must be >= 0)")

        shares = int(dollar_amount / price)

        logger.debug(
            f"${dollar_amount:.2f} at ${price:.2f}/share = {shares} shares "
            f"(${dollar_amount - (shares * price):.2f} remainder)"
        )

        return shares

    @staticmethod
    def target_position(capital_exposure: Number, constrained_size: Number, price: Number) -> int:
        """
        Whole-share target: floor(capital_exposure * constrained_size / price).

        Examples:
            >>> PositionRounder.target_position(27000, 0.40, 180.00)
            60
        """
        dollar_amount = _to_decimal(capital_exposure) * _to_decimal(constrained_size)
        return PositionRounder.round_to_shares(dollar_amount, price)

