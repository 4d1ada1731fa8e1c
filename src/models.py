"""Data models — all frozen (immutable)."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MarketSnapshot:
    """Lending market record as returned by the provider.

    Numeric fields are ``None`` when the upstream record did not carry them.
    """

    symbol: str
    total_supply_usd: float | None = None
    total_borrows_usd: float | None = None
    cash_usd: float | None = None
    supply_apr: float | None = None
    base_supply_apy: float | None = None


@dataclass(frozen=True)
class MarketAllocation:
    """A vault's deployment into one underlying market."""

    allocation: float | None = None
    market_apy: float | None = None
    total_supplied_usd: float | None = None
    market_liquidity_usd: float | None = None


@dataclass(frozen=True)
class VaultSnapshot:
    """Yield vault record as returned by the provider."""

    symbol: str
    total_liquidity_usd: float | None = None
    markets: tuple[MarketAllocation, ...] = ()
    total_apy: float | None = None
    base_apy: float | None = None


@dataclass(frozen=True)
class PoolMetrics:
    """Normalized USD view of one monitored source."""

    total_supply: float
    total_borrows: float
    available_liquidity: float
    apy: float

    @classmethod
    def zero(cls) -> PoolMetrics:
        return cls(total_supply=0.0, total_borrows=0.0, available_liquidity=0.0, apy=0.0)


@dataclass(frozen=True)
class FetchError:
    """One upstream query that exhausted its retries."""

    source: str
    error: str


@dataclass(frozen=True)
class FetchResult:
    """Combined outcome of the market and vault fetches."""

    market: MarketSnapshot | None = None
    vault: VaultSnapshot | None = None
    errors: tuple[FetchError, ...] = ()

    @property
    def has_data(self) -> bool:
        return self.market is not None or self.vault is not None


@dataclass(frozen=True)
class AlertDecision:
    """Per-source breach flags and the overall alert verdict."""

    should_alert: bool
    breaches: dict[str, bool] = field(default_factory=dict)
