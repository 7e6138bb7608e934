"""Persistence of the character record."""

from .player_store import PlayerStore

__all__ = ["PlayerStore"]
