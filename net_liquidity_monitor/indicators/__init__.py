"""Alignment, interpolation and liquidity calculations."""

from net_liquidity_monitor.indicators.alignment import carry_forward
from net_liquidity_monitor.indicators.calculator import LiquidityCalculator, find_year_anchor
from net_liquidity_monitor.indicators.interpolation import DailyIndex, interpolate_daily

__all__ = [
    "DailyIndex",
    "LiquidityCalculator",
    "carry_forward",
    "find_year_anchor",
    "interpolate_daily",
]
