"""Effect applicator -- bridge between catalog card definitions and combat mechanics.

Reads a card's ordered effect entries and dispatches each one to the
handler for its type.  Every handler works against the shared
:class:`~card_rpg.sim.core.entities.Combatant` capability set and never
against ``Character`` or ``Enemy`` specifically.

Usage::

    from card_rpg.sim.interpreter import EffectApplicator

    applicator = EffectApplicator()
    narration = applicator.apply_card_effects(card_def, player, enemy)
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable

from card_rpg.ir.cards import CardDefinition
from card_rpg.ir.effects import EffectDefinition, EffectType
from card_rpg.sim.core.entities import Combatant
from card_rpg.sim.mechanics.targeting import resolve_target

logger = logging.getLogger(__name__)


class EffectParameterError(ValueError):
    """An effect entry is missing a parameter or carries one of the wrong type."""


class EffectApplicator:
    """Applies card effects in catalog order.

    The applicator is stateless between calls -- all mutable state lives on
    the two combatants passed into :meth:`apply_card_effects`.  A failing
    entry (unknown target, bad parameters) is narrated and skipped; the rest
    of the card still applies.
    """

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def apply_card_effects(
        self,
        card: CardDefinition,
        player: Combatant,
        enemy: Combatant,
    ) -> str:
        """Apply every effect on *card*, cast by *player* at *enemy*.

        Parameters
        ----------
        card:
            The card being cast.
        player:
            The caster; ``'self'`` effects land here.
        enemy:
            The opponent; ``'enemy'`` effects land here.

        Returns
        -------
        str
            Narration for every effect, in order, including skipped ones.
        """
        fragments = [f"{player.name} casts {card.name}!"]
        for effect in card.effects:
            fragments.append(self.apply_effect(effect, player, enemy))
        return " ".join(f for f in fragments if f)

    def apply_effect(
        self,
        effect: EffectDefinition,
        player: Combatant,
        enemy: Combatant,
    ) -> str:
        """Apply a single effect entry and return its narration."""
        target = resolve_target(effect.target, player, enemy)
        if target is None:
            logger.warning("Invalid target %r on %s effect, skipping", effect.target, effect.type.value)
            return f"Invalid target '{effect.target}' for {effect.type.value} effect; skipped."

        handler = _DISPATCH.get(effect.type)
        if handler is None:
            logger.warning("No handler for effect type %s", effect.type)
            return f"Unknown effect type '{effect.type}'; skipped."

        try:
            return handler(self, effect, target, player)
        except EffectParameterError as exc:
            logger.warning("Malformed %s effect: %s", effect.type.value, exc)
            return f"Malformed {effect.type.value} effect ({exc}); skipped."

    # ------------------------------------------------------------------
    # Effect handlers (one per EffectType)
    # ------------------------------------------------------------------

    def _handle_damage(self, effect: EffectDefinition, target: Combatant, caster: Combatant) -> str:
        amount = _read_int(effect.params, "amount")
        dealt = target.receive_damage(amount)
        return f"{target.name} takes {dealt} damage."

    def _handle_heal(self, effect: EffectDefinition, target: Combatant, caster: Combatant) -> str:
        amount = _read_int(effect.params, "amount")
        target.heal(amount)
        return f"{target.name} heals for {amount} health."

    def _handle_damage_over_time(
        self, effect: EffectDefinition, target: Combatant, caster: Combatant
    ) -> str:
        amount = _read_int(effect.params, "amount")
        duration = _read_int(effect.params, "duration")
        target.apply_dot(amount, duration)
        return f"{target.name} will take {amount} damage per turn for {duration} turns."

    def _handle_heal_over_time(
        self, effect: EffectDefinition, target: Combatant, caster: Combatant
    ) -> str:
        amount = _read_int(effect.params, "amount")
        duration = _read_int(effect.params, "duration")
        target.apply_hot(amount, duration)
        return f"{target.name} will recover {amount} health per turn for {duration} turns."

    def _handle_buff(self, effect: EffectDefinition, target: Combatant, caster: Combatant) -> str:
        stat = _read_str(effect.params, "stat")
        modifier = _read_float(effect.params, "modifier")
        duration = _read_int(effect.params, "duration")
        target.apply_buff(stat, modifier, duration)
        return f"{target.name}'s {stat} is modified by x{modifier:g} for {duration} turns."

    def _handle_status_effect(
        self, effect: EffectDefinition, target: Combatant, caster: Combatant
    ) -> str:
        name = _read_str(effect.params, "effect")
        chance = _read_float(effect.params, "chance")
        duration = _read_int(effect.params, "duration")
        target.apply_status_effect(name, chance, duration)
        return f"{target.name} is afflicted with {name} for {duration} turns ({chance:.0%} chance)."

    def _handle_life_steal(
        self, effect: EffectDefinition, target: Combatant, caster: Combatant
    ) -> str:
        amount = _read_int(effect.params, "amount")
        # Heals by the nominal amount reported, even if the target had less
        # health left than that.
        dealt = target.receive_damage(amount)
        caster.heal(dealt)
        return f"{caster.name} drains {dealt} health from {target.name}."


# ------------------------------------------------------------------
# Parameter readers
# ------------------------------------------------------------------

def _read_param(params: dict[str, Any], key: str) -> Any:
    if key not in params or params[key] is None:
        raise EffectParameterError(f"missing '{key}'")
    return params[key]


def _read_float(params: dict[str, Any], key: str) -> float:
    value = _read_param(params, key)
    # bool is an int subclass; a flag is never a valid amount.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise EffectParameterError(f"'{key}' must be a number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise EffectParameterError(f"'{key}' must be finite")
    return float(value)


def _read_int(params: dict[str, Any], key: str) -> int:
    return int(_read_float(params, key))


def _read_str(params: dict[str, Any], key: str) -> str:
    value = _read_param(params, key)
    if not isinstance(value, str) or not value:
        raise EffectParameterError(f"'{key}' must be a non-empty string")
    return value


# ------------------------------------------------------------------
# Dispatch table -- maps EffectType -> handler method
# ------------------------------------------------------------------

_DISPATCH: dict[EffectType, Callable[..., str]] = {
    EffectType.DAMAGE: EffectApplicator._handle_damage,
    EffectType.HEAL: EffectApplicator._handle_heal,
    EffectType.DAMAGE_OVER_TIME: EffectApplicator._handle_damage_over_time,
    EffectType.HEAL_OVER_TIME: EffectApplicator._handle_heal_over_time,
    EffectType.BUFF: EffectApplicator._handle_buff,
    EffectType.STATUS_EFFECT: EffectApplicator._handle_status_effect,
    EffectType.LIFE_STEAL: EffectApplicator._handle_life_steal,
}
