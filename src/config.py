"""Configuration loader — reads config.yaml, interpolates env vars, validates."""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

BASE_CHAIN_ID = 8453

# ---------------------------------------------------------------------------
# Frozen config dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ProviderConfig:
    chain_id: int = BASE_CHAIN_ID
    api_endpoints: tuple[str, ...] = ()
    timeout: int = 30


@dataclass(frozen=True)
class SourceConfig:
    """One monitored pool: how to find it and where its liquidity floor sits."""

    name: str = ""
    title: str = ""
    symbol: str = ""
    threshold_usd: float = 0.0


@dataclass(frozen=True)
class SourcesConfig:
    market: SourceConfig = field(
        default_factory=lambda: SourceConfig(
            name="USDC Market",
            title="🏦 USD Coin Core",
            symbol="USDC",
            threshold_usd=4_500_000.0,
        )
    )
    vault: SourceConfig = field(
        default_factory=lambda: SourceConfig(
            name="mwUSDC Vault",
            title="🏛️ Moonwell Flagship USDC",
            symbol="mwUSDC",
            threshold_usd=29_000_000.0,
        )
    )

    def thresholds(self) -> dict[str, float]:
        return {
            self.market.name: self.market.threshold_usd,
            self.vault.name: self.vault.threshold_usd,
        }


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = 3
    delay_ms: int = 2000


@dataclass(frozen=True)
class DiscordConfig:
    webhook_url: str = ""
    alert_color: int = 0xFF0000
    warning_color: int = 0xFFA500
    healthy_color: int = 0x00FF00
    footer_text: str = "Moonwell Base Network"
    timeout: int = 15


@dataclass(frozen=True)
class AppConfig:
    provider: ProviderConfig = field(default_factory=ProviderConfig)
    sources: SourcesConfig = field(default_factory=SourcesConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)
    discord: DiscordConfig = field(default_factory=DiscordConfig)


# ---------------------------------------------------------------------------
# Env interpolation
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)}")


def _interpolate_env(value: Any) -> Any:
    """Recursively replace ${VAR} references with environment variable values."""
    if isinstance(value, str):
        return _ENV_VAR_RE.sub(lambda m: os.environ.get(m.group(1), ""), value)
    if isinstance(value, dict):
        return {k: _interpolate_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_interpolate_env(item) for item in value]
    return value


def _parse_color(value: Any, default: int) -> int:
    """Accept ints as well as "0xFF0000" / "#FF0000" strings."""
    if value is None or value == "":
        return default
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.startswith("#"):
        return int(text[1:], 16)
    return int(text, 0)


# ---------------------------------------------------------------------------
# YAML → dataclass builders
# ---------------------------------------------------------------------------


def _build_provider(raw: dict[str, Any]) -> ProviderConfig:
    return ProviderConfig(
        chain_id=int(raw.get("chain_id", BASE_CHAIN_ID)),
        api_endpoints=tuple(e for e in raw.get("api_endpoints", []) if e),
        timeout=int(raw.get("timeout", 30)),
    )


def _build_source(raw: dict[str, Any], default: SourceConfig) -> SourceConfig:
    return SourceConfig(
        name=raw.get("name", default.name),
        title=raw.get("title", default.title),
        symbol=raw.get("symbol", default.symbol),
        threshold_usd=float(raw.get("threshold_usd", default.threshold_usd)),
    )


def _build_sources(raw: dict[str, Any]) -> SourcesConfig:
    defaults = SourcesConfig()
    return SourcesConfig(
        market=_build_source(raw.get("market", {}), defaults.market),
        vault=_build_source(raw.get("vault", {}), defaults.vault),
    )


def _build_retry(raw: dict[str, Any]) -> RetryConfig:
    return RetryConfig(
        max_attempts=int(raw.get("max_attempts", 3)),
        delay_ms=int(raw.get("delay_ms", 2000)),
    )


def _build_discord(raw: dict[str, Any]) -> DiscordConfig:
    defaults = DiscordConfig()
    return DiscordConfig(
        webhook_url=raw.get("webhook_url", ""),
        alert_color=_parse_color(raw.get("alert_color"), defaults.alert_color),
        warning_color=_parse_color(raw.get("warning_color"), defaults.warning_color),
        healthy_color=_parse_color(raw.get("healthy_color"), defaults.healthy_color),
        footer_text=raw.get("footer_text", defaults.footer_text),
        timeout=int(raw.get("timeout", defaults.timeout)),
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration from YAML + .env.

    Args:
        config_path: Path to config.yaml. Defaults to ``config.yaml`` in the
            project root (two levels up from this file).

    Raises:
        FileNotFoundError: the config file does not exist.
        ConfigurationError: a required value is missing or out of range.
    """
    load_dotenv()

    if config_path is None:
        config_path = Path(__file__).resolve().parent.parent / "config.yaml"
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    raw = _interpolate_env(raw)

    try:
        cfg = AppConfig(
            provider=_build_provider(raw.get("provider", {})),
            sources=_build_sources(raw.get("sources", {})),
            retry=_build_retry(raw.get("retry", {})),
            discord=_build_discord(raw.get("discord", {})),
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration value: {e}") from e

    _validate(cfg)
    logger.info("Configuration loaded from %s", config_path)
    return cfg


def _validate(cfg: AppConfig) -> None:
    """Raise ConfigurationError on invalid configuration."""
    if not cfg.discord.webhook_url:
        raise ConfigurationError(
            "Discord webhook URL is not set (discord.webhook_url / DISCORD_WEBHOOK_URL)"
        )

    if not cfg.provider.api_endpoints:
        raise ConfigurationError("At least one provider API endpoint must be configured")

    if cfg.retry.max_attempts < 1:
        raise ConfigurationError("retry.max_attempts must be at least 1")
    if cfg.retry.delay_ms < 0:
        raise ConfigurationError("retry.delay_ms must not be negative")

    for source in (cfg.sources.market, cfg.sources.vault):
        if not source.symbol:
            raise ConfigurationError(f"Source '{source.name}' has no symbol")
        if source.threshold_usd < 0:
            raise ConfigurationError(
                f"Source '{source.name}' has a negative threshold"
            )

    if cfg.sources.market.name == cfg.sources.vault.name:
        raise ConfigurationError(
            f"Source names must be unique, got '{cfg.sources.market.name}' twice"
        )
