"""Combat mechanics for the card RPG engine.

Re-exports the primary functions from each mechanics module for convenience.

Usage::

    from card_rpg.sim.mechanics import (
        calculate_basic_attack, deal_basic_attack,
        spend_mana, restore_mana,
        tick_ongoing_effects, check_incapacitated,
        resolve_target,
    )
"""

# -- damage ------------------------------------------------------------------
from .damage import calculate_basic_attack, deal_basic_attack

# -- mana --------------------------------------------------------------------
from .mana import restore_mana, spend_mana

# -- ongoing effects ---------------------------------------------------------
from .ongoing_effects import (
    INCAPACITATING_STATUSES,
    check_incapacitated,
    tick_ongoing_effects,
)

# -- targeting ---------------------------------------------------------------
from .targeting import resolve_target

__all__ = [
    # damage
    "calculate_basic_attack",
    "deal_basic_attack",
    # mana
    "spend_mana",
    "restore_mana",
    # ongoing effects
    "INCAPACITATING_STATUSES",
    "tick_ongoing_effects",
    "check_incapacitated",
    # targeting
    "resolve_target",
]
