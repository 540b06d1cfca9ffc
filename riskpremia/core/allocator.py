"""
Inverse-volatility sizing with an aggregate leverage cap.

Each instrument gets vol_target / ann_vol of capital. If the sizes add up
to more than max_leverage, every size is multiplied by the same factor so
the total equals max_leverage. Relative weights never change.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Mapping

logger = logging.getLogger('CORE.ALLOCATOR')


@dataclass(frozen=True)
class Allocation:
    """
    Result of one sizing pass.

    Attributes:
        theoretical_sizes: {symbol: vol_target / ann_vol}
        constrained_sizes: {symbol: theoretical size * scale_factor}
        total_theoretical: Sum of theoretical sizes
        scale_factor: Uniform factor applied (1.0 when uncapped)
    """
    theoretical_sizes: Dict[str, float]
    constrained_sizes: Dict[str, float]
    total_theoretical: float
    scale_factor: float

    @property
    def total_constrained(self) -> float:
        return sum(self.constrained_sizes.values())


class SizeAllocator:
    """
    Convert volatility estimates into leverage-constrained weights.

    Example:
        >>> allocator = SizeAllocator(vol_target=0.10, max_leverage=1.0)
        >>> allocation = allocator.allocate({'GLD': 0.15, 'TLT': 0.12, 'VTI': 0.18})
        >>> round(allocation.scale_factor, 4)
        0.4865
    """

    def __init__(self, vol_target: float, max_leverage: float):
        """
        Args:
            vol_target: Annualized volatility target per instrument (> 0)
            max_leverage: Cap on the sum of sizes (> 0)

        Raises:
            ValueError: If either parameter is not positive
        """
        if vol_target <= 0:
            raise ValueError(f"Invalid vol target: {vol_target} (must be > 0)")
        if max_leverage <= 0:
            raise ValueError(f"Invalid max leverage: {max_leverage} (must be > 0)")

        self.vol_target = vol_target
        self.max_leverage = max_leverage

    def theoretical_size(self, ann_vol: float) -> float:
        """Inverse-volatility size; zero volatility gives zero size."""
        if ann_vol == 0.0:
            return 0.0
        return self.vol_target / ann_vol

    def scale_factor(self, total_size: float) -> float:
        """Uniform factor that brings total_size down to max_leverage."""
        if total_size > self.max_leverage:
            return self.max_leverage / total_size
        return 1.0

    def allocate(self, annualized_vols: Mapping[str, float]) -> Allocation:
        """
        Size every instrument and apply the leverage cap.

        Args:
            annualized_vols: {symbol: ann_vol} (non-negative)

        Returns:
            Allocation with theoretical and constrained sizes
        """
        theoretical = {
            symbol: self.theoretical_size(vol)
            for symbol, vol in annualized_vols.items()
        }

        total = sum(theoretical.values())
        factor = self.scale_factor(total)

        constrained = {symbol: size * factor for symbol, size in theoretical.items()}

        if factor < 1.0:
            logger.info(
                f"Total size {total:.4f} exceeds max leverage {self.max_leverage:.2f}, "
                f"scaling by {factor:.4f}"
            )
        for symbol in theoretical:
            logger.debug(
                f"{symbol}: theo={theoretical[symbol]:.4f} constrained={constrained[symbol]:.4f}"
            )

        return Allocation(
            theoretical_sizes=theoretical,
            constrained_sizes=constrained,
            total_theoretical=total,
            scale_factor=factor,
        )
