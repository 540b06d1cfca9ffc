"""
Configuration management for the Risk Premia engine.

Loads the portfolio configuration from a YAML file and environment
variables (.env supported) into a frozen, validated PortfolioConfig.

Example config/portfolio.yaml:

    portfolio:
      symbols: [GLD, TLT, VTI]
      lookback_window: 90
      vol_target: 0.10
      max_leverage: 1.0
      min_commission: 1.0
      per_share_commission: 0.005
      capital_exposure: 27000
      rebalance_policy:
        mode: tracking_error
        threshold: 0.10
"""
import os
from pathlib import Path
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

# Environment variables (override YAML)
ENV_CAPITAL_EXPOSURE = 'RISKPREMIA_CAPITAL_EXPOSURE'
ENV_RUN_PHASE = 'RISKPREMIA_RUN_PHASE'

DEFAULT_CONFIG_PATH = Path('config/portfolio.yaml')

# Default US-listed ETFs: gold, long treasuries, total stock market
US_ASSETS = ['GLD', 'TLT', 'VTI']


class TrackingErrorPolicy(BaseModel):
    """Rebalance an instrument when |target - current| / target > threshold."""

    model_config = ConfigDict(frozen=True)

    mode: Literal['tracking_error'] = 'tracking_error'
    threshold: float = Field(default=0.10, gt=0, lt=1)


class CalendarPolicy(BaseModel):
    """
    Rebalance the whole portfolio on a fixed trading day of the month.

    Months with fewer sessions than trigger_day_of_month rebalance on
    their last session.
    """

    model_config = ConfigDict(frozen=True)

    mode: Literal['calendar'] = 'calendar'
    trigger_day_of_month: int = Field(default=1, ge=1, le=23)


RebalancePolicy = Annotated[
    Union[TrackingErrorPolicy, CalendarPolicy],
    Field(discriminator='mode'),
]


class PortfolioConfig(BaseModel):
    """
    Immutable per-run portfolio configuration.

    capital_exposure is the default USD notional; callers may override it
    per evaluation since it is operator-adjustable at runtime.
    """

    model_config = ConfigDict(frozen=True)

    symbols: List[str] = Field(default_factory=lambda: list(US_ASSETS), min_length=1)
    lookback_window: int = Field(default=90, gt=0)
    vol_target: float = Field(default=0.10, gt=0)
    max_leverage: float = Field(default=1.0, gt=0)
    min_commission: float = Field(default=1.0, ge=0)
    per_share_commission: float = Field(default=0.005, ge=0)
    annualization_factor: int = Field(default=252, gt=0)
    capital_exposure: float = Field(default=0.0, ge=0)
    rebalance_policy: RebalancePolicy = Field(default_factory=TrackingErrorPolicy)

    @field_validator('symbols')
    @classmethod
    def _normalize_symbols(cls, symbols: List[str]) -> List[str]:
        normalized = [s.strip().upper() for s in symbols]
        if any(not s for s in normalized):
            raise ValueError("Symbol cannot be empty")
        if len(set(normalized)) != len(normalized):
            raise ValueError(f"Duplicate symbols: {normalized}")
        return normalized

    @property
    def is_calendar_mode(self) -> bool:
        return isinstance(self.rebalance_policy, CalendarPolicy)

    def with_capital_exposure(self, capital_exposure: float) -> 'PortfolioConfig':
        """Return a copy with a new (validated) capital exposure."""
        data = self.model_dump()
        data['capital_exposure'] = capital_exposure
        return PortfolioConfig.model_validate(data)


def _load_yaml(config_path: Path) -> Dict[str, Any]:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        return yaml.safe_load(f) or {}


def build_config(data: Dict[str, Any]) -> PortfolioConfig:
    """
    Validate a raw mapping into a PortfolioConfig.

    Raises:
        ValueError: If any field is invalid (message lists every problem)
    """
    try:
        return PortfolioConfig.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ValueError(f"Invalid portfolio configuration: {problems}") from e


def load_config(
    config_path: Optional[Path] = None,
    env_file: str = '.env'
) -> PortfolioConfig:
    """
    Load portfolio configuration.

    Checks in order (later wins):
    1. YAML file `portfolio:` section (or top level)
    2. Environment variables (RISKPREMIA_CAPITAL_EXPOSURE)

    Args:
        config_path: Path to YAML file (default: config/portfolio.yaml)
        env_file: Path to .env file

    Returns:
        Validated PortfolioConfig

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If configuration is invalid
    """
    load_dotenv(env_file)

    raw = _load_yaml(Path(config_path) if config_path else DEFAULT_CONFIG_PATH)
    data = dict(raw.get('portfolio', raw))

    env_capital = os.getenv(ENV_CAPITAL_EXPOSURE)
    if env_capital is not None:
        data['capital_exposure'] = float(env_capital)

    return build_config(data)


def get_run_phase_name(default: str = 'preview') -> str:
    """Run phase requested through the environment (default: preview)."""
    return os.getenv(ENV_RUN_PHASE, default)
