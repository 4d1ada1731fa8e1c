"""Notification modules."""
from .discord import DiscordNotifier

__all__ = ["DiscordNotifier"]
