"""Derive normalized PoolMetrics from provider snapshots."""
from __future__ import annotations

import math

from ..models import MarketSnapshot, PoolMetrics, VaultSnapshot


def _amount(value: float | None) -> float:
    """Missing, non-finite or negative upstream figures read as zero."""
    if value is None or not math.isfinite(value) or value < 0:
        return 0.0
    return value


def _first_rate(*values: float | None) -> float:
    """First non-zero rate among ``values``, else 0."""
    for value in values:
        rate = _amount(value)
        if rate:
            return rate
    return 0.0


def calculate_market_metrics(snapshot: MarketSnapshot | None) -> PoolMetrics:
    """Metrics for a lending market; an absent snapshot gives all zeros."""
    if snapshot is None:
        return PoolMetrics.zero()

    return PoolMetrics(
        total_supply=_amount(snapshot.total_supply_usd),
        total_borrows=_amount(snapshot.total_borrows_usd),
        available_liquidity=_amount(snapshot.cash_usd),
        apy=_first_rate(snapshot.supply_apr, snapshot.base_supply_apy),
    )


def calculate_vault_metrics(snapshot: VaultSnapshot | None) -> PoolMetrics:
    """Metrics for a vault spread across underlying markets.

    APY is the sum of ``allocation * market_apy``; weights are taken as
    delivered and not renormalized. Available liquidity is the idle cash
    plus what the underlying markets can return, capped at the vault's own
    total liquidity.
    """
    if snapshot is None:
        return PoolMetrics.zero()

    vault_liquidity = _amount(snapshot.total_liquidity_usd)
    total_supplied = 0.0
    total_market_liquidity = 0.0

    if snapshot.markets:
        apy = 0.0
        for market in snapshot.markets:
            apy += _amount(market.allocation) * _amount(market.market_apy)
            total_supplied += _amount(market.total_supplied_usd)
            total_market_liquidity += _amount(market.market_liquidity_usd)
    else:
        apy = _first_rate(snapshot.total_apy, snapshot.base_apy)

    # negative when allocations report more than the vault holds
    idle_cash = vault_liquidity - total_supplied
    available_liquidity = min(vault_liquidity, idle_cash + total_market_liquidity)

    return PoolMetrics(
        total_supply=vault_liquidity,
        total_borrows=total_supplied,
        available_liquidity=available_liquidity,
        apy=apy,
    )
