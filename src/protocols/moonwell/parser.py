"""Pure parsing functions for Moonwell market and vault records — no I/O."""
from __future__ import annotations

import math
from typing import Any

from ...models import MarketAllocation, MarketSnapshot, VaultSnapshot


def to_float(value: Any) -> float | None:
    """Coerce a numeric upstream value to float.

    Numbers and numeric strings are accepted; anything else (missing,
    ``None``, booleans, garbage, NaN/inf) becomes ``None``.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _nested(record: dict[str, Any], *keys: str) -> Any:
    """Follow ``keys`` through nested dicts, returning None on any gap."""
    value: Any = record
    for key in keys:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def market_symbol(record: dict[str, Any]) -> str | None:
    """Underlying asset symbol of a market record."""
    return _nested(record, "underlyingToken", "symbol")


def vault_symbol(record: dict[str, Any]) -> str | None:
    """Vault token symbol of a vault record."""
    return _nested(record, "vaultToken", "symbol")


def find_market(records: list[dict[str, Any]], symbol: str) -> dict[str, Any] | None:
    """First market whose underlying symbol equals ``symbol`` exactly."""
    return next((r for r in records if market_symbol(r) == symbol), None)


def find_vault(records: list[dict[str, Any]], symbol: str) -> dict[str, Any] | None:
    """First vault whose token symbol equals ``symbol`` exactly."""
    return next((r for r in records if vault_symbol(r) == symbol), None)


def parse_market(record: dict[str, Any]) -> MarketSnapshot:
    """Build a MarketSnapshot from a raw market record.

    ``cash`` is an amount object; its USD figure lives under ``cash.value``.
    """
    return MarketSnapshot(
        symbol=market_symbol(record) or "",
        total_supply_usd=to_float(record.get("totalSupplyUsd")),
        total_borrows_usd=to_float(record.get("totalBorrowsUsd")),
        cash_usd=to_float(_nested(record, "cash", "value")),
        supply_apr=to_float(record.get("totalSupplyApr")),
        base_supply_apy=to_float(record.get("baseSupplyApy")),
    )


def parse_allocation(entry: dict[str, Any]) -> MarketAllocation:
    """Build a MarketAllocation from one entry of a vault's ``markets`` list."""
    return MarketAllocation(
        allocation=to_float(entry.get("allocation")),
        market_apy=to_float(entry.get("marketApy")),
        total_supplied_usd=to_float(entry.get("totalSuppliedUsd")),
        market_liquidity_usd=to_float(entry.get("marketLiquidityUsd")),
    )


def parse_vault(record: dict[str, Any]) -> VaultSnapshot:
    """Build a VaultSnapshot from a raw vault record."""
    markets = record.get("markets") or []
    return VaultSnapshot(
        symbol=vault_symbol(record) or "",
        total_liquidity_usd=to_float(record.get("totalLiquidityUsd")),
        markets=tuple(parse_allocation(m) for m in markets if isinstance(m, dict)),
        total_apy=to_float(record.get("totalApy")),
        base_apy=to_float(record.get("baseApy")),
    )
