"""Market data client protocol — upstream provider abstraction."""
from typing import Any, Protocol


class MarketDataClient(Protocol):
    """Abstract interface for listing lending markets and vaults on a chain."""

    async def get_markets(self, chain_id: int) -> list[dict[str, Any]]: ...

    async def get_vaults(self, chain_id: int) -> list[dict[str, Any]]: ...
