"""Moonwell liquidity monitor."""
