"""Character creation from the race and class tables.

Each race distributes 80 stat points; the class adds a bonus on top and
hands out the starting gear.  Health and mana pools derive from endurance
and intelligence and start full.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from card_rpg.errors import CharacterCreationError
from card_rpg.sim.core.entities import Character, Stats

if TYPE_CHECKING:
    from card_rpg.sim.content.registry import ContentRegistry

logger = logging.getLogger(__name__)

HEALTH_PER_ENDURANCE = 10
MANA_PER_INTELLIGENCE = 5
STARTING_LEVEL = 1
STARTING_GOLD = 100


def max_health_for(stats: Stats) -> int:
    return stats.endurance * HEALTH_PER_ENDURANCE


def max_mana_for(stats: Stats) -> int:
    return stats.intelligence * MANA_PER_INTELLIGENCE


def create_character(
    name: str,
    character_class: str,
    race: str,
    registry: ContentRegistry,
) -> Character:
    """Build a level-1 character with full health and mana.

    Parameters
    ----------
    name:
        Character name; also the persistence key.
    character_class:
        ``"Warrior"``, ``"Mage"``, or ``"Rogue"`` (any class in the table).
    race:
        ``"Human"``, ``"Elf"``, ``"Dwarf"``, ``"Orc"``, or ``"Gnome"``.
    registry:
        Registry with the character tables loaded.

    Raises
    ------
    CharacterCreationError
        If the name is blank or the race/class is not in the tables.
    """
    if not name or not name.strip():
        raise CharacterCreationError("Character name is required")

    base = registry.get_race_stats(race)
    if base is None:
        raise CharacterCreationError(f"Unknown race: {race!r}")
    class_data = registry.get_class_data(character_class)
    if class_data is None:
        raise CharacterCreationError(f"Unknown class: {character_class!r}")

    stats = Stats(**base)
    for stat_name, bonus in class_data.get("bonuses", {}).items():
        setattr(stats, stat_name, getattr(stats, stat_name) + bonus)

    max_health = max_health_for(stats)
    max_mana = max_mana_for(stats)

    character = Character(
        name=name.strip(),
        character_class=character_class,
        race=race,
        level=STARTING_LEVEL,
        xp=0,
        health=max_health,
        max_health=max_health,
        mana=max_mana,
        max_mana=max_mana,
        gold=STARTING_GOLD,
        armor=class_data.get("armor", ""),
        weapon=class_data.get("weapon", ""),
        stats=stats,
    )
    logger.info("Created %s the %s %s", character.name, race, character_class)
    return character
