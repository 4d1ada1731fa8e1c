"""Exception types shared across the monitor."""
from __future__ import annotations


class ConfigurationError(ValueError):
    """Required configuration is missing or invalid."""


class FetchFailure(Exception):
    """An upstream query kept failing after every retry attempt."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


class DeliveryError(Exception):
    """The webhook answered with a non-2xx status."""

    def __init__(self, status: int, reason: str) -> None:
        super().__init__(f"Discord webhook failed: {status} {reason}")
        self.status = status
        self.reason = reason
