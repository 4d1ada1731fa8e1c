"""Discord webhook notification service."""
import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ..config import DiscordConfig
from ..errors import DeliveryError

logger = logging.getLogger(__name__)


class DiscordNotifier:
    """Post embeds to a Discord webhook."""

    def __init__(self, config: DiscordConfig) -> None:
        self.webhook_url = config.webhook_url
        self.timeout = config.timeout

    async def send(self, embed: dict[str, Any]) -> None:
        """Deliver ``embed``; raise DeliveryError on a non-2xx answer.

        Transport errors from aiohttp propagate unchanged.
        """
        payload = {"embeds": [embed]}

        ssl_context = ssl.create_default_context(cafile=certifi.where())
        connector = aiohttp.TCPConnector(ssl=ssl_context)

        async with aiohttp.ClientSession(connector=connector) as session:
            async with session.post(
                self.webhook_url,
                json=payload,
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            ) as response:
                if not 200 <= response.status < 300:
                    raise DeliveryError(response.status, response.reason or "")

        logger.info("Discord message sent: %s", embed.get("title", ""))
