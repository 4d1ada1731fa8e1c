"""Notifier protocol — notification channel abstraction."""
from typing import Any, Protocol


class Notifier(Protocol):
    """Abstract interface for delivering one structured message."""

    async def send(self, embed: dict[str, Any]) -> None: ...
