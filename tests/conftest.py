"""Shared test fixtures and sample data."""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any

import pytest

from src.config import (
    AppConfig,
    DiscordConfig,
    ProviderConfig,
    RetryConfig,
    SourceConfig,
    SourcesConfig,
)
from src.models import MarketAllocation, MarketSnapshot, VaultSnapshot


# ---------------------------------------------------------------------------
# Config fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_provider_config() -> ProviderConfig:
    return ProviderConfig(
        chain_id=8453,
        api_endpoints=("https://api1.example.com", "https://api2.example.com"),
        timeout=10,
    )


@pytest.fixture()
def sample_sources() -> SourcesConfig:
    return SourcesConfig(
        market=SourceConfig(
            name="USDC Market",
            title="🏦 USD Coin Core",
            symbol="USDC",
            threshold_usd=4_500_000.0,
        ),
        vault=SourceConfig(
            name="mwUSDC Vault",
            title="🏛️ Moonwell Flagship USDC",
            symbol="mwUSDC",
            threshold_usd=29_000_000.0,
        ),
    )


@pytest.fixture()
def sample_app_config(
    sample_provider_config: ProviderConfig,
    sample_sources: SourcesConfig,
) -> AppConfig:
    return AppConfig(
        provider=sample_provider_config,
        sources=sample_sources,
        retry=RetryConfig(max_attempts=3, delay_ms=0),
        discord=DiscordConfig(
            webhook_url="https://discord.example.com/api/webhooks/1/abc",
            footer_text="Moonwell Base Network",
        ),
    )


# ---------------------------------------------------------------------------
# Config YAML fixture
# ---------------------------------------------------------------------------

SAMPLE_YAML = textwrap.dedent("""\
    provider:
      chain_id: 8453
      api_endpoints: ["https://api.example.com"]
      timeout: 10
    sources:
      market:
        name: "USDC Market"
        title: "USD Coin Core"
        symbol: USDC
        threshold_usd: 4500000
      vault:
        name: "mwUSDC Vault"
        title: "Moonwell Flagship USDC"
        symbol: mwUSDC
        threshold_usd: 29000000
    retry:
      max_attempts: 5
      delay_ms: 100
    discord:
      webhook_url: "https://discord.example.com/hook"
      alert_color: 0xFF0000
      warning_color: "#FFA500"
      footer_text: "Moonwell Base Network"
""")


@pytest.fixture()
def sample_yaml_path(tmp_path: Path) -> Path:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(SAMPLE_YAML)
    return cfg_file


# ---------------------------------------------------------------------------
# Sample provider records
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_market_record() -> dict[str, Any]:
    return {
        "underlyingToken": {"symbol": "USDC", "decimals": 6},
        "totalSupplyUsd": 10_000_000.0,
        "totalBorrowsUsd": 7_000_000.0,
        "cash": {"value": 3_000_000.0},
        "totalSupplyApr": 6.5,
        "baseSupplyApy": 5.1,
    }


@pytest.fixture()
def sample_vault_record() -> dict[str, Any]:
    return {
        "vaultToken": {"symbol": "mwUSDC"},
        "totalLiquidityUsd": 50_000_000.0,
        "markets": [
            {
                "allocation": 0.6,
                "marketApy": 8.0,
                "totalSuppliedUsd": 30_000_000.0,
                "marketLiquidityUsd": 5_000_000.0,
            },
            {
                "allocation": 0.4,
                "marketApy": 5.0,
                "totalSuppliedUsd": 15_000_000.0,
                "marketLiquidityUsd": 10_000_000.0,
            },
        ],
        "totalApy": 7.0,
    }


# ---------------------------------------------------------------------------
# Model fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sample_market() -> MarketSnapshot:
    return MarketSnapshot(
        symbol="USDC",
        total_supply_usd=10_000_000.0,
        total_borrows_usd=7_000_000.0,
        cash_usd=3_000_000.0,
        supply_apr=6.5,
        base_supply_apy=5.1,
    )


@pytest.fixture()
def sample_vault() -> VaultSnapshot:
    return VaultSnapshot(
        symbol="mwUSDC",
        total_liquidity_usd=50_000_000.0,
        markets=(
            MarketAllocation(
                allocation=0.6,
                market_apy=8.0,
                total_supplied_usd=30_000_000.0,
                market_liquidity_usd=5_000_000.0,
            ),
            MarketAllocation(
                allocation=0.4,
                market_apy=5.0,
                total_supplied_usd=15_000_000.0,
                market_liquidity_usd=10_000_000.0,
            ),
        ),
    )
