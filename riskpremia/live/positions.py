"""
Position Providers - Current holdings supplied by the broker side.

The core holds no position state between days. Every evaluation asks a
PositionProvider for the open + pending quantity of each instrument, so
a restarted run picks up exactly where the broker is.
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml

logger = logging.getLogger('LIVE.POSITIONS')


class PositionProvider(ABC):
    """
    Abstract base class for position sources.

    Subclasses must implement:
        - get_position(): open + pending long quantity for a symbol
    """

    @abstractmethod
    def get_position(self, symbol: str) -> int:
        """
        Current open + pending quantity.

        Args:
            symbol: Ticker symbol

        Returns:
            Whole shares (>= 0, long-only); 0 when nothing is held
        """
        raise NotImplementedError("Subclasses must implement get_position()")


def _validate_quantity(symbol: str, quantity: int) -> int:
    quantity = int(quantity)
    if quantity < 0:
        raise ValueError(f"Invalid position for {symbol}: {quantity} (long-only, must be >= 0)")
    return quantity


class StaticPositionProvider(PositionProvider):
    """Positions from an in-memory mapping (previews and tests)."""

    def __init__(self, positions: Optional[Mapping[str, int]] = None):
        self._positions: Dict[str, int] = {
            symbol.upper(): _validate_quantity(symbol, qty)
            for symbol, qty in (positions or {}).items()
        }

    def get_position(self, symbol: str) -> int:
        return self._positions.get(symbol.upper(), 0)


class YamlPositionProvider(PositionProvider):
    """
    Positions from a YAML file of {symbol: shares}.

    The file is re-read on every call so manual edits between runs are
    always picked up.

    Example positions.yaml:
        GLD: 150
        TLT: 188
        VTI: 88
    """

    def __init__(self, positions_path: Path):
        self.positions_path = Path(positions_path)

        if not self.positions_path.exists():
            raise FileNotFoundError(f"Positions file not found: {self.positions_path}")

    def _load(self) -> Dict[str, int]:
        with open(self.positions_path, 'r') as f:
            raw = yaml.safe_load(f) or {}

        if not isinstance(raw, dict):
            raise ValueError(
                f"Positions file {self.positions_path} must map symbols to share counts"
            )

        return {str(symbol).upper(): _validate_quantity(symbol, qty) for symbol, qty in raw.items()}

    def get_position(self, symbol: str) -> int:
        quantity = self._load().get(symbol.upper(), 0)
        logger.debug(f"{symbol}: {quantity} shares from {self.positions_path}")
        return quantity
