"""Unit tests for the Discord notifier."""
from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
import pytest

from src.config import DiscordConfig
from src.errors import DeliveryError
from src.notifications.discord import DiscordNotifier

EMBED = {"title": "🚨 Moonwell Liquidity Alert", "color": 0xFF0000, "fields": []}


@pytest.fixture()
def discord_notifier() -> DiscordNotifier:
    return DiscordNotifier(
        DiscordConfig(webhook_url="https://discord.example.com/api/webhooks/1/abc")
    )


def _mock_session(status: int = 204, reason: str = "No Content", error: Exception | None = None):
    """Create a mock aiohttp session whose post() answers with ``status``."""
    mock_response = AsyncMock()
    mock_response.status = status
    mock_response.reason = reason
    mock_response.__aenter__ = AsyncMock(return_value=mock_response)
    mock_response.__aexit__ = AsyncMock(return_value=None)

    mock_session = AsyncMock()
    if error:
        mock_session.post = MagicMock(side_effect=error)
    else:
        mock_session.post = MagicMock(return_value=mock_response)
    mock_session.__aenter__ = AsyncMock(return_value=mock_session)
    mock_session.__aexit__ = AsyncMock(return_value=None)
    return mock_session


class TestDiscordNotifier:
    @pytest.mark.asyncio
    async def test_send_success(self, discord_notifier: DiscordNotifier) -> None:
        mock_session = _mock_session(204)

        with patch("src.notifications.discord.aiohttp.ClientSession", return_value=mock_session):
            with patch("src.notifications.discord.aiohttp.TCPConnector"):
                await discord_notifier.send(EMBED)

        mock_session.post.assert_called_once()
        call = mock_session.post.call_args
        assert call.args[0] == "https://discord.example.com/api/webhooks/1/abc"
        assert call.kwargs["json"] == {"embeds": [EMBED]}

    @pytest.mark.asyncio
    async def test_send_200_is_success(self, discord_notifier: DiscordNotifier) -> None:
        mock_session = _mock_session(200, "OK")

        with patch("src.notifications.discord.aiohttp.ClientSession", return_value=mock_session):
            with patch("src.notifications.discord.aiohttp.TCPConnector"):
                await discord_notifier.send(EMBED)

    @pytest.mark.asyncio
    async def test_non_2xx_raises_delivery_error(self, discord_notifier: DiscordNotifier) -> None:
        mock_session = _mock_session(404, "Not Found")

        with patch("src.notifications.discord.aiohttp.ClientSession", return_value=mock_session):
            with patch("src.notifications.discord.aiohttp.TCPConnector"):
                with pytest.raises(DeliveryError) as exc:
                    await discord_notifier.send(EMBED)

        assert exc.value.status == 404
        assert exc.value.reason == "Not Found"
        assert str(exc.value) == "Discord webhook failed: 404 Not Found"

    @pytest.mark.asyncio
    async def test_redirect_is_not_success(self, discord_notifier: DiscordNotifier) -> None:
        mock_session = _mock_session(302, "Found")

        with patch("src.notifications.discord.aiohttp.ClientSession", return_value=mock_session):
            with patch("src.notifications.discord.aiohttp.TCPConnector"):
                with pytest.raises(DeliveryError):
                    await discord_notifier.send(EMBED)

    @pytest.mark.asyncio
    async def test_transport_error_propagates(self, discord_notifier: DiscordNotifier) -> None:
        mock_session = _mock_session(error=aiohttp.ClientConnectionError("refused"))

        with patch("src.notifications.discord.aiohttp.ClientSession", return_value=mock_session):
            with patch("src.notifications.discord.aiohttp.TCPConnector"):
                with pytest.raises(aiohttp.ClientConnectionError):
                    await discord_notifier.send(EMBED)

        mock_session.post.assert_called_once()
