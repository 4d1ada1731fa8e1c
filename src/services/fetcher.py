"""Bounded-retry fetching of the market and vault snapshots."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

from ..config import RetryConfig, SourcesConfig
from ..errors import FetchFailure
from ..models import FetchError, FetchResult
from ..protocols.moonwell import MoonwellAdapter

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def fetch_with_retry(
    query: Callable[[], Awaitable[T | None]],
    source: str,
    max_attempts: int = 3,
    delay_ms: int = 2000,
) -> T | None:
    """Run ``query`` up to ``max_attempts`` times with a fixed delay between tries.

    A ``None`` result means the query worked but found nothing; it is
    returned as-is and never retried.

    Raises:
        FetchFailure: every attempt raised. Carries the last error message.
    """
    last_error: Exception | None = None

    for attempt in range(1, max_attempts + 1):
        try:
            record = await query()
        except Exception as e:
            last_error = e
            logger.error(
                "Error fetching %s (attempt %d/%d): %s", source, attempt, max_attempts, e
            )
            if attempt < max_attempts:
                logger.info("Retrying in %dms...", delay_ms)
                await asyncio.sleep(delay_ms / 1000)
            continue

        if record is None:
            logger.info("✗ %s not found", source)
        else:
            logger.info("✓ Found %s", source)
        return record

    raise FetchFailure(source, str(last_error))


async def fetch_all(
    adapter: MoonwellAdapter,
    sources: SourcesConfig,
    retry: RetryConfig,
) -> FetchResult:
    """Fetch market and vault concurrently; a failure in one never stops the other."""
    logger.info("Fetching Moonwell data...")

    market_outcome, vault_outcome = await asyncio.gather(
        fetch_with_retry(
            adapter.fetch_market, sources.market.name, retry.max_attempts, retry.delay_ms
        ),
        fetch_with_retry(
            adapter.fetch_vault, sources.vault.name, retry.max_attempts, retry.delay_ms
        ),
        return_exceptions=True,
    )

    errors: list[FetchError] = []
    market = _unwrap(market_outcome, errors)
    vault = _unwrap(vault_outcome, errors)

    return FetchResult(market=market, vault=vault, errors=tuple(errors))


def _unwrap(outcome: Any, errors: list[FetchError]) -> Any:
    """Turn a FetchFailure into a FetchError record; re-raise anything else."""
    if isinstance(outcome, FetchFailure):
        errors.append(FetchError(source=outcome.source, error=outcome.message))
        return None
    if isinstance(outcome, BaseException):
        raise outcome
    return outcome
