"""Moonwell adapter — single-attempt market and vault lookups."""
from __future__ import annotations

import logging

from ...config import ProviderConfig, SourcesConfig
from ...interfaces.market_data import MarketDataClient
from ...models import MarketSnapshot, VaultSnapshot
from . import parser

logger = logging.getLogger(__name__)


class MoonwellAdapter:
    """Find the configured market and vault among everything listed on the chain."""

    def __init__(
        self,
        client: MarketDataClient,
        provider: ProviderConfig,
        sources: SourcesConfig,
    ) -> None:
        self._client = client
        self._chain_id = provider.chain_id
        self._market_symbol = sources.market.symbol
        self._vault_symbol = sources.vault.symbol

    async def fetch_market(self) -> MarketSnapshot | None:
        """Return the target market, or None when it is not listed."""
        markets = await self._client.get_markets(self._chain_id)
        logger.info("Found %d markets on chain %d", len(markets), self._chain_id)

        record = parser.find_market(markets, self._market_symbol)
        if record is None:
            return None
        return parser.parse_market(record)

    async def fetch_vault(self) -> VaultSnapshot | None:
        """Return the target vault, or None when it is not listed."""
        vaults = await self._client.get_vaults(self._chain_id)
        logger.info("Found %d vaults on chain %d", len(vaults), self._chain_id)

        record = parser.find_vault(vaults, self._vault_symbol)
        if record is None:
            return None
        return parser.parse_vault(record)
