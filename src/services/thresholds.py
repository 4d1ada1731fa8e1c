"""Liquidity floor checks."""
from __future__ import annotations

from typing import Mapping

from ..models import AlertDecision, PoolMetrics


def is_breach(liquidity: float, threshold: float) -> bool:
    """Strictly below the floor; sitting exactly on it is fine."""
    return liquidity < threshold


def evaluate(
    metrics: Mapping[str, PoolMetrics],
    thresholds: Mapping[str, float],
) -> AlertDecision:
    """Flag every source whose available liquidity is under its threshold."""
    breaches = {
        source: is_breach(pool.available_liquidity, thresholds[source])
        for source, pool in metrics.items()
    }
    return AlertDecision(should_alert=any(breaches.values()), breaches=breaches)
