"""Moonwell data API client with endpoint fallback."""
from __future__ import annotations

import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ...config import ProviderConfig

logger = logging.getLogger(__name__)


class MoonwellClient:
    """Lists Moonwell markets and vaults, falling back across API endpoints."""

    def __init__(self, config: ProviderConfig) -> None:
        self.endpoints = [e.rstrip("/") for e in config.api_endpoints]
        self.timeout = config.timeout
        self.current_index = 0

    async def api_get(self, path: str, params: dict[str, Any]) -> Any:
        """GET ``path`` from the current endpoint, trying the others on failure."""
        if not self.endpoints:
            raise RuntimeError("No Moonwell API endpoints configured")

        ssl_context = ssl.create_default_context(cafile=certifi.where())

        last_error: Exception | None = None
        for attempt in range(len(self.endpoints)):
            index = (self.current_index + attempt) % len(self.endpoints)
            url = f"{self.endpoints[index]}/{path.lstrip('/')}"

            try:
                connector = aiohttp.TCPConnector(ssl=ssl_context)
                async with aiohttp.ClientSession(connector=connector) as session:
                    async with session.get(
                        url,
                        params=params,
                        timeout=aiohttp.ClientTimeout(total=self.timeout),
                    ) as response:
                        if response.status != 200:
                            raise RuntimeError(f"HTTP {response.status} from {url}")
                        result = await response.json()
                        if isinstance(result, dict) and "error" in result:
                            raise RuntimeError(f"API Error: {result['error']}")

                        if index != self.current_index:
                            logger.info("Switched to API endpoint: %s", self.endpoints[index])
                            self.current_index = index

                        return result
            except Exception as e:
                last_error = e
                logger.warning("API endpoint %s failed: %s", url, e)
                if attempt < len(self.endpoints) - 1:
                    logger.info("Trying next endpoint...")
                continue

        raise RuntimeError(f"All API endpoints failed. Last error: {last_error}")

    @staticmethod
    def _records(result: Any) -> list[dict[str, Any]]:
        """Accept either a bare list or ``{"data": [...]}``."""
        if isinstance(result, dict):
            if "data" not in result:
                raise RuntimeError("API response has no data list")
            result = result["data"]
        if not isinstance(result, list):
            raise RuntimeError(f"Unexpected API response type: {type(result).__name__}")
        return [r for r in result if isinstance(r, dict)]

    async def get_markets(self, chain_id: int) -> list[dict[str, Any]]:
        """List lending markets on ``chain_id``."""
        result = await self.api_get("markets", {"chainId": chain_id})
        return self._records(result)

    async def get_vaults(self, chain_id: int) -> list[dict[str, Any]]:
        """List vaults on ``chain_id``."""
        result = await self.api_get("vaults", {"chainId": chain_id})
        return self._records(result)
