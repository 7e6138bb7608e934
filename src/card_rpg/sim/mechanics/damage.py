"""Basic-attack damage.

Both sides swing for twice their strength.  There is no armor, dodge, or
buff reconciliation in the pipeline; buffs are stored but inert.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from card_rpg.sim.core.entities import Combatant

BASIC_ATTACK_MULTIPLIER = 2


def calculate_basic_attack(strength: int) -> int:
    """Return the damage of a basic attack made with *strength*."""
    return max(0, strength * BASIC_ATTACK_MULTIPLIER)


def deal_basic_attack(strength: int, target: Combatant) -> int:
    """Hit *target* with a basic attack.  Returns the damage dealt."""
    damage = calculate_basic_attack(strength)
    return target.receive_damage(damage)
