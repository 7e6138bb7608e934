"""Core simulation primitives for the combat engine."""

from card_rpg.sim.core.entities import (
    ActiveBuff,
    ActiveDoT,
    ActiveHoT,
    ActiveStatus,
    Character,
    Combatant,
    Enemy,
    Stats,
)
from card_rpg.sim.core.rng import GameRNG

__all__ = [
    # rng
    "GameRNG",
    # entities
    "Combatant",
    "Character",
    "Enemy",
    "Stats",
    "ActiveDoT",
    "ActiveHoT",
    "ActiveBuff",
    "ActiveStatus",
]
