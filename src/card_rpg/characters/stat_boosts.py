"""Stat-boost cards -- a random 1..4 draw the player spends on one stat."""

from __future__ import annotations

import logging
from typing import Protocol

from card_rpg.errors import StatBoostError
from card_rpg.characters.creation import max_health_for, max_mana_for
from card_rpg.sim.core.entities import Character, Stats
from card_rpg.sim.mechanics.mana import restore_mana

logger = logging.getLogger(__name__)

MIN_BOOST = 1
MAX_BOOST = 4

BOOSTABLE_STATS = frozenset(Stats.model_fields)


class IntSource(Protocol):
    def random_int(self, low: int, high: int) -> int: ...


def draw_stat_boost_card(rng: IntSource) -> int:
    """Draw a stat-boost card value in ``MIN_BOOST..MAX_BOOST``."""
    return rng.random_int(MIN_BOOST, MAX_BOOST)


def apply_stat_boost(character: Character, stat_name: str, boost: int) -> Character:
    """Raise one stat on *character* by *boost* and return it.

    Endurance and intelligence also recompute ``max_health`` / ``max_mana``;
    the matching pool is refilled only if it was already full.

    Raises
    ------
    StatBoostError
        If *boost* is outside ``1..4`` or *stat_name* is not a stat.
    """
    valid_value = isinstance(boost, int) and not isinstance(boost, bool)
    if not valid_value or not MIN_BOOST <= boost <= MAX_BOOST:
        raise StatBoostError(f"Invalid card value: {boost!r}")

    stat = stat_name.lower().strip() if isinstance(stat_name, str) else ""
    if stat not in BOOSTABLE_STATS:
        raise StatBoostError(f"Invalid stat: {stat_name!r}")

    setattr(character.stats, stat, getattr(character.stats, stat) + boost)
    logger.info("Applied +%d %s to %s", boost, stat, character.name)

    if stat == "intelligence":
        was_full = character.mana == character.max_mana
        character.max_mana = max_mana_for(character.stats)
        if was_full:
            restore_mana(character)
    elif stat == "endurance":
        was_full = character.health == character.max_health
        character.max_health = max_health_for(character.stats)
        if was_full:
            character.set_health(character.max_health)

    logger.debug(
        "%s pools: health=%d/%d mana=%d/%d",
        character.name,
        character.health,
        character.max_health,
        character.mana,
        character.max_mana,
    )
    return character
