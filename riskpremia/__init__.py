"""
Risk Premia Engine - Volatility-targeted daily rebalancing for a small ETF portfolio.
"""

__version__ = '0.1.0'
