"""Discord embed builders — pure functions from metrics/errors to payload dicts."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Sequence

from ..models import FetchError, PoolMetrics

ALERT_TITLE = "🚨 Moonwell Liquidity Alert"
ERROR_TITLE = "⚠️ Moonwell Data Fetch Warning"
DATA_UNAVAILABLE = "⚠️ Data unavailable"


def format_usd(value: float, decimals: int = 2) -> str:
    """Format a USD amount with thousands separators, e.g. ``4,500,000.00``."""
    if not value:
        return "0"
    return f"{value:,.{decimals}f}"


def format_apy(apy: float) -> str:
    """Format an APY already expressed in percent, e.g. ``6.80%``."""
    return f"{apy:.2f}%"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def build_field(
    name: str,
    metrics: PoolMetrics,
    has_data: bool,
    breach: bool | None = None,
    threshold: float | None = None,
) -> dict[str, Any]:
    """Embed field for one monitored pool.

    Without data the field carries a fixed marker instead of figures. When
    ``breach`` is given a status line is appended.
    """
    if not has_data:
        return {"name": name, "value": DATA_UNAVAILABLE, "inline": False}

    lines = [
        f"**Total Supply:** ${format_usd(metrics.total_supply)}",
        f"**Total Borrow:** ${format_usd(metrics.total_borrows)}",
        f"**Available Liquidity:** ${format_usd(metrics.available_liquidity)}",
        f"**APY:** {format_apy(metrics.apy)}",
    ]
    if breach is not None:
        if breach:
            floor = f" (${format_usd(threshold)})" if threshold is not None else ""
            lines.append(f"**Status:** ⚠️ BELOW threshold{floor}")
        else:
            lines.append("**Status:** ✓ Healthy")

    return {"name": name, "value": "\n".join(lines), "inline": False}


def build_alert_embed(
    fields: Sequence[dict[str, Any]],
    color: int,
    footer_text: str,
    title: str = ALERT_TITLE,
    description: str | None = None,
) -> dict[str, Any]:
    """Liquidity alert embed, one field per monitored pool."""
    embed: dict[str, Any] = {
        "title": title,
        "color": color,
        "fields": [dict(f) for f in fields],
        "timestamp": _timestamp(),
        "footer": {"text": footer_text},
    }
    if description:
        embed["description"] = description
    return embed


def build_error_embed(
    errors: Sequence[FetchError],
    max_attempts: int,
    color: int,
    footer_text: str,
) -> dict[str, Any]:
    """Warning embed listing every source that could not be fetched."""
    return {
        "title": ERROR_TITLE,
        "description": (
            f"Failed to retrieve data from Moonwell API after {max_attempts} attempts. "
            "This may be a temporary issue."
        ),
        "color": color,
        "fields": [
            {
                "name": f"⚠️ {err.source}",
                "value": f"Failed to fetch data: {err.error}",
                "inline": False,
            }
            for err in errors
        ],
        "timestamp": _timestamp(),
        "footer": {"text": footer_text},
    }
