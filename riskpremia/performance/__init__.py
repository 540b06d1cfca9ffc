"""Run logging: daily diagnostics CSV."""
from riskpremia.performance.diagnostics_logger import DiagnosticsLogger

__all__ = ['DiagnosticsLogger']
