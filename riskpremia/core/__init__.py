"""
Core sizing and rebalance decision engine.

Modules:
    - volatility: Annualized volatility from daily closes
    - allocator: Inverse-volatility sizing with a leverage cap
    - rebalance: Tracking-error and calendar rebalance triggers
    - position_delta: Order size and commission estimate
    - diagnostics: Daily per-instrument diagnostics record
    - engine: Per-day pipeline tying the above together
"""
from riskpremia.core.models import (
    InstrumentState,
    TradeInstruction,
    TradingDay,
)
from riskpremia.core.volatility import VolatilityEstimator
from riskpremia.core.allocator import Allocation, SizeAllocator
from riskpremia.core.rebalance import (
    RebalanceState,
    RebalanceTrigger,
    TrackingErrorTrigger,
    CalendarTrigger,
    create_trigger,
    tracking_error,
)
from riskpremia.core.position_delta import PositionDeltaCalculator
from riskpremia.core.diagnostics import DailyDiagnosticsRecord, DIAGNOSTICS_COLUMNS
from riskpremia.core.engine import DailyDecision, RiskPremiaEngine

__all__ = [
    'InstrumentState',
    'TradeInstruction',
    'TradingDay',
    'VolatilityEstimator',
    'Allocation',
    'SizeAllocator',
    'RebalanceState',
    'RebalanceTrigger',
    'TrackingErrorTrigger',
    'CalendarTrigger',
    'create_trigger',
    'tracking_error',
    'PositionDeltaCalculator',
    'DailyDiagnosticsRecord',
    'DIAGNOSTICS_COLUMNS',
    'DailyDecision',
    'RiskPremiaEngine',
]
