"""Protocol interfaces for the liquidity monitor."""
from .market_data import MarketDataClient
from .notifier import Notifier

__all__ = ["MarketDataClient", "Notifier"]
