"""Fed net liquidity monitor: FRED series in, net liquidity metrics out."""

from net_liquidity_monitor.config import Settings
from net_liquidity_monitor.data import FredFetcher
from net_liquidity_monitor.errors import (
    DegenerateHistoryError,
    IncompleteDataError,
    InvalidRequestError,
    LiquidityError,
)
from net_liquidity_monitor.indicators import LiquidityCalculator
from net_liquidity_monitor.service import LiquidityMonitor

__all__ = [
    "DegenerateHistoryError",
    "FredFetcher",
    "IncompleteDataError",
    "InvalidRequestError",
    "LiquidityCalculator",
    "LiquidityError",
    "LiquidityMonitor",
    "Settings",
]
