"""Moonwell data provider."""
from .adapter import MoonwellAdapter
from .client import MoonwellClient

__all__ = ["MoonwellAdapter", "MoonwellClient"]
