"""Refresh scheduling and export."""

from net_liquidity_monitor.service.export import state_to_dict, write_json
from net_liquidity_monitor.service.monitor import LiquidityMonitor

__all__ = ["LiquidityMonitor", "state_to_dict", "write_json"]
