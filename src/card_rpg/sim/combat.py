"""Combat round controller -- ties ongoing effects, the player's action, and
enemy retaliation together into one round.

A round always runs in the same order:

1. Tick the player's ongoing effects, then the enemy's.  If either dies
   here the round ends before anyone acts.
2. Resolve the player's action (basic attack or card cast).
3. If the enemy is still standing, it retaliates unless a stun/freeze
   status triggers.
4. If the player has fallen, the encounter is resolved as a defeat.
"""

from __future__ import annotations

import logging
from enum import Enum

from pydantic import BaseModel

from card_rpg.ir.cards import CardDefinition
from card_rpg.sim.core.entities import Character, Enemy
from card_rpg.sim.interpreter import EffectApplicator
from card_rpg.sim.mechanics.damage import deal_basic_attack
from card_rpg.sim.mechanics.mana import spend_mana
from card_rpg.sim.mechanics.ongoing_effects import (
    ChanceSource,
    check_incapacitated,
    tick_ongoing_effects,
)

logger = logging.getLogger(__name__)

_STATUS_VERBS = {"stun": "stunned", "freeze": "frozen"}


class CombatState(str, Enum):
    """Encounter lifecycle."""

    IDLE = "idle"
    """No enemy -- nothing to fight until ``start``."""

    IN_PROGRESS = "in_progress"
    """Enemy alive, player alive, rounds are accepted."""

    RESOLVED = "resolved"
    """One side is at zero health; only ``start`` is accepted."""


class RoundOutcome(BaseModel):
    """What one round (or a ``start``) reports back to the caller."""

    result: str
    """Narration for the round, fragments joined by spaces."""

    player_hp: int
    enemy_hp: int
    player_mana: int
    combat_over: bool

    enemy_defeated: bool = False
    """True when the enemy fell this round (the session then clears it)."""

    player_defeated: bool = False


class CombatRoundController:
    """Resolves single rounds between a character and an enemy.

    Holds no encounter state of its own; everything it mutates lives on the
    two combatants passed in.

    Parameters
    ----------
    rng:
        Source of uniform draws for stun/freeze trigger checks.
    applicator:
        Effect applicator used for card casts.  A fresh one is created if
        omitted.
    """

    def __init__(self, rng: ChanceSource, applicator: EffectApplicator | None = None) -> None:
        self._rng = rng
        self._applicator = applicator or EffectApplicator()

    # ------------------------------------------------------------------
    # Player actions
    # ------------------------------------------------------------------

    def attack(self, player: Character, enemy: Enemy) -> RoundOutcome:
        """Resolve a round in which the player makes a basic attack."""
        fragments: list[str] = []

        early = self._tick_round_start(player, enemy, fragments)
        if early is not None:
            return early

        dealt = deal_basic_attack(player.stats.strength, enemy)
        fragments.append(f"{player.name} attacks {enemy.name} for {dealt} damage!")
        logger.debug("%s basic attack for %d, enemy hp=%d", player.name, dealt, enemy.health)

        if enemy.is_dead:
            return self._enemy_defeated(player, enemy, fragments)
        return self._finish_round(player, enemy, fragments)

    def cast_spell(self, player: Character, enemy: Enemy, card: CardDefinition) -> RoundOutcome:
        """Resolve a round in which the player casts *card*.

        A card the player cannot afford is a no-op for the action: no mana
        is spent, no effect applies, and the enemy does not retaliate.
        """
        fragments: list[str] = []

        early = self._tick_round_start(player, enemy, fragments)
        if early is not None:
            return early

        if not spend_mana(player, card.mana_cost):
            fragments.append(
                f"Not enough mana to cast {card.name} "
                f"(needs {card.mana_cost}, has {player.mana})."
            )
            logger.info("Cast of %s rejected: mana %d < %d", card.name, player.mana, card.mana_cost)
            return self._outcome(player, enemy, fragments, combat_over=False)

        fragments.append(self._applicator.apply_card_effects(card, player, enemy))

        if enemy.is_dead:
            return self._enemy_defeated(player, enemy, fragments)
        return self._finish_round(player, enemy, fragments)

    # ------------------------------------------------------------------
    # Round phases
    # ------------------------------------------------------------------

    def _tick_round_start(
        self,
        player: Character,
        enemy: Enemy,
        fragments: list[str],
    ) -> RoundOutcome | None:
        """Tick the player, then the enemy.  Returns an outcome if the round
        ends here."""
        fragments.append(tick_ongoing_effects(player))
        if player.is_dead:
            return self._player_defeated(player, enemy, fragments)

        fragments.append(tick_ongoing_effects(enemy))
        if enemy.is_dead:
            return self._enemy_defeated(player, enemy, fragments)
        return None

    def _enemy_retaliation(self, player: Character, enemy: Enemy, fragments: list[str]) -> None:
        status = check_incapacitated(enemy, self._rng)
        if status is not None:
            verb = _STATUS_VERBS.get(status.effect_name.lower(), "incapacitated")
            fragments.append(f"{enemy.name} is {verb} and skips its turn!")
            logger.debug("%s skipped its turn (%s)", enemy.name, status.effect_name)
            return

        dealt = deal_basic_attack(enemy.strength, player)
        fragments.append(f"{enemy.name} attacks {player.name} for {dealt} damage!")

    def _finish_round(self, player: Character, enemy: Enemy, fragments: list[str]) -> RoundOutcome:
        if not player.is_dead:
            self._enemy_retaliation(player, enemy, fragments)
        if player.is_dead:
            return self._player_defeated(player, enemy, fragments)
        return self._outcome(player, enemy, fragments, combat_over=False)

    # ------------------------------------------------------------------
    # Terminal outcomes
    # ------------------------------------------------------------------

    def _enemy_defeated(self, player: Character, enemy: Enemy, fragments: list[str]) -> RoundOutcome:
        player.xp += enemy.experience_reward
        fragments.append(f"{enemy.name} defeated! You gain {enemy.experience_reward} XP.")
        logger.info("%s defeated %s (+%d XP)", player.name, enemy.name, enemy.experience_reward)
        return self._outcome(player, enemy, fragments, combat_over=True, enemy_defeated=True)

    def _player_defeated(self, player: Character, enemy: Enemy, fragments: list[str]) -> RoundOutcome:
        fragments.append(f"{player.name} defeated! Game over.")
        logger.info("%s was defeated by %s", player.name, enemy.name)
        return self._outcome(player, enemy, fragments, combat_over=True, player_defeated=True)

    @staticmethod
    def _outcome(
        player: Character,
        enemy: Enemy,
        fragments: list[str],
        *,
        combat_over: bool,
        enemy_defeated: bool = False,
        player_defeated: bool = False,
    ) -> RoundOutcome:
        return RoundOutcome(
            result=" ".join(f for f in fragments if f),
            player_hp=player.health,
            enemy_hp=enemy.health,
            player_mana=player.mana,
            combat_over=combat_over,
            enemy_defeated=enemy_defeated,
            player_defeated=player_defeated,
        )
