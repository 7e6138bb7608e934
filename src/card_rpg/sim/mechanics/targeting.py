"""Target resolution -- translate an effect's target selector to a combatant."""

from __future__ import annotations

from typing import TYPE_CHECKING

from card_rpg.ir.effects import EffectTarget

if TYPE_CHECKING:
    from card_rpg.sim.core.entities import Combatant


def resolve_target(selector: str, caster: Combatant, opponent: Combatant) -> Combatant | None:
    """Resolve ``'self'`` to *caster* and ``'enemy'`` to *opponent*.

    Returns ``None`` for any other selector.
    """
    key = selector.lower().strip() if isinstance(selector, str) else ""

    if key == EffectTarget.SELF.value:
        return caster
    if key == EffectTarget.ENEMY.value:
        return opponent
    return None
