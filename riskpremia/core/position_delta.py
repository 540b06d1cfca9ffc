"""
Position delta - turn a target holding into an order.

Commission follows a minimum-ticket model (IB fixed tier by default):
the per-share rate is max(per_share_commission, min_commission / shares),
so small tickets pay the minimum spread across their shares.
"""
import logging
from typing import Optional

from riskpremia.core.models import TradeInstruction

logger = logging.getLogger('CORE.POSITION_DELTA')


class PositionDeltaCalculator:
    """
    Compare current vs. target holdings and derive a signed order.

    Long-only: sells only reduce an existing holding and never go below
    zero because targets are never negative.
    """

    def __init__(self, min_commission: float = 1.0, per_share_commission: float = 0.005):
        """
        Args:
            min_commission: Minimum charge per ticket in dollars
            per_share_commission: Rate per share in dollars
        """
        if min_commission < 0:
            raise ValueError(f"Invalid min commission: {min_commission} (must be >= 0)")
        if per_share_commission < 0:
            raise ValueError(
                f"Invalid per-share commission: {per_share_commission} (must be >= 0)"
            )

        self.min_commission = min_commission
        self.per_share_commission = per_share_commission

    def estimate_commission(self, position_diff: int) -> float:
        """
        Per-share commission estimate for an order of position_diff shares.

        Args:
            position_diff: Absolute order size (> 0)

        Returns:
            max(per_share_commission, min_commission / position_diff)

        Examples:
            >>> PositionDeltaCalculator(1.0, 0.005).estimate_commission(4)
            0.25
        """
        if position_diff <= 0:
            raise ValueError(f"Invalid position diff: {position_diff} (must be > 0)")
        return max(self.per_share_commission, self.min_commission / position_diff)

    def calculate(
        self,
        symbol: str,
        current_position: int,
        target_position: int
    ) -> Optional[TradeInstruction]:
        """
        Build the order that moves current_position to target_position.

        Args:
            symbol: Ticker symbol
            current_position: Shares held (open + pending, >= 0)
            target_position: Shares wanted (>= 0)

        Returns:
            TradeInstruction, or None when already at target

        Raises:
            ValueError: If either position is negative (long-only)
        """
        if current_position < 0:
            raise ValueError(f"Invalid current position for {symbol}: {current_position} (long-only)")
        if target_position < 0:
            raise ValueError(f"Invalid target position for {symbol}: {target_position} (long-only)")

        position_diff = abs(target_position - current_position)
        if position_diff == 0:
            logger.debug(f"{symbol}: already at target ({target_position} shares)")
            return None

        commission = self.estimate_commission(position_diff)
        signed_quantity = position_diff if target_position > current_position else -position_diff

        instruction = TradeInstruction(
            symbol=symbol,
            signed_quantity=signed_quantity,
            estimated_commission=commission,
        )
        logger.info(f"{symbol}: {current_position} -> {target_position} shares: {instruction}")
        return instruction
