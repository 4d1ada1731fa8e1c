"""Service modules"""
from .monitor import LiquidityMonitor, RunOutcome

__all__ = ["LiquidityMonitor", "RunOutcome"]
