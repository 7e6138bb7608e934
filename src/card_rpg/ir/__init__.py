"""Catalog schema for card content.

Cards and their effect entries are pydantic models that load cleanly from
the packaged JSON data and are never mutated during combat.
"""

from .cards import CardDefinition, CardType
from .effects import EffectDefinition, EffectTarget, EffectType

__all__ = [
    # cards
    "CardDefinition",
    "CardType",
    # effects
    "EffectDefinition",
    "EffectTarget",
    "EffectType",
]
