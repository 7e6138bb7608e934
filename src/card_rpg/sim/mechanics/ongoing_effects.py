"""Ongoing-effect lifecycle -- tick, expire, and chance-gated status checks.

Runs once per round for each combatant, before that combatant acts.  The
order inside one tick is fixed:

    1. damage-over-time entries (health down)
    2. heal-over-time entries (health up, capped at max)
    3. status entries (duration only)
    4. buff entries (duration only -- buffs never touch combat math)

An entry fires only while its remaining duration is positive, and is
dropped as soon as the decrement brings it to zero.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, TypeVar

if TYPE_CHECKING:
    from card_rpg.sim.core.entities import ActiveStatus, Combatant

logger = logging.getLogger(__name__)

# Status names that cost the afflicted combatant its turn when they trigger.
INCAPACITATING_STATUSES = frozenset({"stun", "freeze"})


class _Timed(Protocol):
    remaining_duration: int


_E = TypeVar("_E", bound=_Timed)


class ChanceSource(Protocol):
    """Anything that can produce a uniform draw in ``[0.0, 1.0)``."""

    def random_float(self) -> float: ...


def tick_ongoing_effects(combatant: Combatant) -> str:
    """Advance every ongoing effect on *combatant* by one round.

    Parameters
    ----------
    combatant:
        The combatant whose DoTs, HoTs, statuses, and buffs are advanced.

    Returns
    -------
    str
        Narration for the round log (empty if nothing happened).  The caller
        must re-check ``combatant.is_dead`` afterwards.
    """
    fragments: list[str] = []

    for dot in _live(combatant.active_dots):
        combatant.receive_damage(dot.amount)
        fragments.append(
            f"{combatant.name} takes {dot.amount} damage from a lingering effect."
        )
        dot.remaining_duration -= 1
    combatant.active_dots[:] = _live(combatant.active_dots)

    for hot in _live(combatant.active_hots):
        combatant.heal(hot.amount)
        fragments.append(
            f"{combatant.name} recovers {hot.amount} health from a lingering effect."
        )
        hot.remaining_duration -= 1
    combatant.active_hots[:] = _live(combatant.active_hots)

    for status in _live(combatant.active_status):
        status.remaining_duration -= 1
        if status.remaining_duration <= 0:
            fragments.append(f"{combatant.name} is no longer affected by {status.effect_name}.")
    combatant.active_status[:] = _live(combatant.active_status)

    for buff in _live(combatant.active_buffs):
        buff.remaining_duration -= 1
        if buff.remaining_duration <= 0:
            fragments.append(f"{combatant.name}'s {buff.stat} buff wears off.")
    combatant.active_buffs[:] = _live(combatant.active_buffs)

    logger.debug(
        "Ticked %s: health=%d dots=%d hots=%d status=%d buffs=%d",
        combatant.name,
        combatant.health,
        len(combatant.active_dots),
        len(combatant.active_hots),
        len(combatant.active_status),
        len(combatant.active_buffs),
    )
    return " ".join(fragments)


def check_incapacitated(combatant: Combatant, rng: ChanceSource) -> ActiveStatus | None:
    """Roll every stun/freeze entry on *combatant* against its trigger chance.

    Each entry gets its own independent draw; the first success wins and no
    further entries are rolled.

    Returns
    -------
    ActiveStatus | None
        The entry that triggered, or ``None`` if the combatant may act.
    """
    for status in combatant.active_status:
        if status.effect_name.lower() not in INCAPACITATING_STATUSES:
            continue
        if status.remaining_duration <= 0:
            continue
        if rng.random_float() < status.trigger_chance:
            return status
    return None


def _live(entries: list[_E]) -> list[_E]:
    return [e for e in entries if e.remaining_duration > 0]
