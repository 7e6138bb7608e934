"""Mana pool -- spend and restore.

Casting a card spends its mana cost up front.  A cast the player cannot
afford spends nothing.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from card_rpg.sim.core.entities import Character


def spend_mana(character: Character, amount: int) -> bool:
    """Attempt to spend mana.  Returns False if insufficient.

    Parameters
    ----------
    character:
        The casting character.
    amount:
        Mana cost to pay.

    Returns
    -------
    bool
        True if the mana was spent, False if the character did not have
        enough (in which case the pool is untouched).
    """
    if character.mana < amount:
        return False
    character.mana -= amount
    return True


def restore_mana(character: Character, amount: int | None = None) -> None:
    """Refill mana by *amount* (or to ``max_mana``), never above the cap."""
    if amount is None:
        character.mana = character.max_mana
    else:
        character.mana = min(character.max_mana, character.mana + max(0, amount))
