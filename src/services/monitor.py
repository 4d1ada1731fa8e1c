"""Liquidity monitoring orchestration — fetch, evaluate, alert."""
from __future__ import annotations

import enum
import logging
from datetime import datetime, timezone
from typing import Any

from ..config import AppConfig, SourceConfig
from ..interfaces.notifier import Notifier
from ..models import AlertDecision, FetchError, FetchResult, PoolMetrics
from ..notifications import DiscordNotifier
from ..notifications.embeds import (
    build_alert_embed,
    build_error_embed,
    build_field,
    format_usd,
)
from ..protocols.moonwell import MoonwellAdapter, MoonwellClient
from .fetcher import fetch_all
from .metrics import calculate_market_metrics, calculate_vault_metrics
from .thresholds import evaluate

logger = logging.getLogger(__name__)

TEST_TITLE = "🧪 TEST: Moonwell Liquidity Alert"
TEST_FOOTER_SUFFIX = " - TEST RUN"
TEST_DESCRIPTION = "**This is a test message with simulated low liquidity data**"

# Sample figures used by ``send_test_alert``; both sit below the default floors.
TEST_MARKET_METRICS = PoolMetrics(
    total_supply=10_000_000.0,
    total_borrows=7_000_000.0,
    available_liquidity=3_000_000.0,
    apy=6.5,
)
TEST_VAULT_METRICS = PoolMetrics(
    total_supply=50_000_000.0,
    total_borrows=28_000_000.0,
    available_liquidity=22_000_000.0,
    apy=8.2,
)


class RunOutcome(enum.Enum):
    """How a single monitoring pass ended."""

    ERROR_ALERT_SENT = "error_alert_sent"
    ALERT_SENT = "alert_sent"
    NO_ALERT = "no_alert"


class LiquidityMonitor:
    """Runs one pass of the market/vault liquidity check."""

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._sources = config.sources
        self._discord = config.discord

        client = MoonwellClient(config.provider)
        self._adapter = MoonwellAdapter(client, config.provider, config.sources)
        self._notifier: Notifier = DiscordNotifier(config.discord)

    # ------------------------------------------------------------------
    # Formatting helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _now_str() -> str:
        return datetime.now(timezone.utc).isoformat()

    def _log_comparison(
        self, source: SourceConfig, metrics: PoolMetrics, breach: bool
    ) -> None:
        logger.info(
            "%s: $%s (threshold: $%s) %s",
            source.name,
            format_usd(metrics.available_liquidity),
            format_usd(source.threshold_usd),
            "⚠️ BELOW" if breach else "✓",
        )

    def _build_data_embed(
        self,
        market_metrics: PoolMetrics,
        vault_metrics: PoolMetrics,
        decision: AlertDecision,
        has_market: bool = True,
        has_vault: bool = True,
        name_suffix: str = "",
        **embed_kwargs: str,
    ) -> dict[str, Any]:
        market, vault = self._sources.market, self._sources.vault
        fields = [
            build_field(
                market.title + name_suffix,
                market_metrics,
                has_market,
                breach=decision.breaches.get(market.name),
                threshold=market.threshold_usd,
            ),
            build_field(
                vault.title + name_suffix,
                vault_metrics,
                has_vault,
                breach=decision.breaches.get(vault.name),
                threshold=vault.threshold_usd,
            ),
        ]
        color = (
            self._discord.alert_color
            if decision.should_alert
            else self._discord.healthy_color
        )
        embed_kwargs.setdefault("footer_text", self._discord.footer_text)
        return build_alert_embed(fields, color=color, **embed_kwargs)

    def _evaluate(
        self, market_metrics: PoolMetrics, vault_metrics: PoolMetrics
    ) -> AlertDecision:
        market, vault = self._sources.market, self._sources.vault
        decision = evaluate(
            {market.name: market_metrics, vault.name: vault_metrics},
            self._sources.thresholds(),
        )
        self._log_comparison(market, market_metrics, decision.breaches[market.name])
        self._log_comparison(vault, vault_metrics, decision.breaches[vault.name])
        return decision

    # ------------------------------------------------------------------
    # Core workflows
    # ------------------------------------------------------------------

    async def check_and_alert(self) -> RunOutcome:
        """Fetch both sources, evaluate thresholds and alert when needed.

        Raises:
            DeliveryError: the webhook rejected the message.
        """
        logger.info("[%s] Starting liquidity check...", self._now_str())

        data = await fetch_all(self._adapter, self._sources, self._config.retry)
        outcome = await self._process(data)

        logger.info("[%s] Check complete!", self._now_str())
        return outcome

    async def _process(self, data: FetchResult) -> RunOutcome:
        if data.errors:
            logger.warning("⚠️  Data fetch errors detected")

            if not data.has_data:
                logger.error("🚨 CRITICAL: No data available, sending error alert")
                embed = build_error_embed(
                    data.errors,
                    self._config.retry.max_attempts,
                    color=self._discord.warning_color,
                    footer_text=self._discord.footer_text,
                )
                await self._notifier.send(embed)
                logger.info("✅ Error alert sent to Discord")
                return RunOutcome.ERROR_ALERT_SENT

            logger.warning("⚠️  Partial data available, continuing with liquidity check")

        market_metrics = calculate_market_metrics(data.market)
        vault_metrics = calculate_vault_metrics(data.vault)

        decision = self._evaluate(market_metrics, vault_metrics)

        if not decision.should_alert:
            logger.info("ℹ️  No alerts needed - all liquidity levels are healthy")
            return RunOutcome.NO_ALERT

        logger.warning("🚨 ALERT: Sending notification to Discord")
        embed = self._build_data_embed(
            market_metrics,
            vault_metrics,
            decision,
            has_market=data.market is not None,
            has_vault=data.vault is not None,
        )
        await self._notifier.send(embed)
        logger.info("✅ Alert sent to Discord successfully")
        return RunOutcome.ALERT_SENT

    async def send_test_alert(self) -> None:
        """Send a liquidity alert built from fixed sample figures."""
        logger.info("Sending test liquidity alert...")
        decision = self._evaluate(TEST_MARKET_METRICS, TEST_VAULT_METRICS)
        embed = self._build_data_embed(
            TEST_MARKET_METRICS,
            TEST_VAULT_METRICS,
            decision,
            name_suffix=" (Simulated)",
            title=TEST_TITLE,
            description=TEST_DESCRIPTION,
            footer_text=self._discord.footer_text + TEST_FOOTER_SUFFIX,
        )
        await self._notifier.send(embed)
        logger.info("✅ Test alert sent to Discord")

    async def send_test_error_alert(self) -> None:
        """Send the all-sources-failed warning with sample errors."""
        logger.info("Sending test error alert...")
        errors = (
            FetchError(
                source=self._sources.market.name,
                error="Network timeout after 3 retries",
            ),
            FetchError(
                source=self._sources.vault.name,
                error="API rate limit exceeded",
            ),
        )
        embed = build_error_embed(
            errors,
            self._config.retry.max_attempts,
            color=self._discord.warning_color,
            footer_text=self._discord.footer_text + TEST_FOOTER_SUFFIX,
        )
        await self._notifier.send(embed)
        logger.info("✅ Test error alert sent to Discord")
