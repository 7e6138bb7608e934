"""Encounter session -- the single in-flight enemy and the actions that reach it.

The session is owned by whatever boundary drives the game (the HTTP app,
a script, a test) and is passed around explicitly; the combat core keeps
no module-level state.  The session itself does no locking: callers that
share one across threads must serialise access.
"""

from __future__ import annotations

import logging
from enum import Enum

from card_rpg.errors import InvalidActionError, UnknownCardError
from card_rpg.sim.combat import CombatRoundController, CombatState, RoundOutcome
from card_rpg.sim.content.registry import DEFAULT_ENEMY_ID, ContentRegistry
from card_rpg.sim.core.entities import Character, Enemy
from card_rpg.sim.mechanics.ongoing_effects import ChanceSource

logger = logging.getLogger(__name__)


class CombatAction(str, Enum):
    """Action names accepted at the request boundary."""

    START = "start"
    ATTACK = "attack"
    CAST_SPELL = "castSpell"


class EncounterSession:
    """Holds the player, the current enemy (or none), and dispatches actions.

    Parameters
    ----------
    registry:
        Content registry used for card lookups and enemy creation.
    rng:
        Source of uniform draws for stun/freeze checks.
    player:
        The character fighting.  May be set later via :attr:`player`.
    enemy_id:
        Template every new encounter is instantiated from.
    """

    def __init__(
        self,
        registry: ContentRegistry,
        rng: ChanceSource,
        player: Character | None = None,
        enemy_id: str = DEFAULT_ENEMY_ID,
    ) -> None:
        self.registry = registry
        self.player = player
        self.enemy: Enemy | None = None
        self._enemy_id = enemy_id
        self._controller = CombatRoundController(rng)
        self._resolved = False

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> CombatState:
        if self.enemy is None:
            return CombatState.IDLE
        if self._resolved or self.enemy.is_dead:
            return CombatState.RESOLVED
        return CombatState.IN_PROGRESS

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def start(self) -> RoundOutcome:
        """Begin an encounter.

        A fresh enemy is created when no encounter is in progress (idle, or
        the previous one resolved, whichever side fell).  While a fight is
        under way the current enemy is kept and its state reported.

        The player's lingering effects from the previous encounter are
        dropped.  Health is not restored.
        """
        player = self._require_player()

        enemy = self.enemy
        if enemy is not None and self.state is CombatState.IN_PROGRESS:
            message = f"The fight with {enemy.name} is already under way."
        else:
            player.clear_ongoing_effects()
            enemy = self.enemy = self.registry.create_enemy(self._enemy_id)
            self._resolved = False
            message = f"Fight started! {enemy.name} appears."
            logger.info("Encounter started: %s vs %s", player.name, enemy.name)

        return RoundOutcome(
            result=message,
            player_hp=player.health,
            enemy_hp=enemy.health,
            player_mana=player.mana,
            combat_over=False,
        )

    def perform_action(self, action: str | CombatAction, card_id: int | None = None) -> RoundOutcome:
        """Run one action against the current encounter.

        Parameters
        ----------
        action:
            ``"start"``, ``"attack"``, or ``"castSpell"``.
        card_id:
            Catalog id of the card to cast (``castSpell`` only).

        Raises
        ------
        InvalidActionError
            Unknown action, no character, no encounter in progress, the
            encounter is already resolved, or a cast without a card id.
        UnknownCardError
            ``castSpell`` names a card the catalog does not have.
        """
        try:
            action = CombatAction(action)
        except ValueError:
            logger.warning("Rejected unknown action %r", action)
            raise InvalidActionError(f"Unknown action: {action!r}") from None

        if action is CombatAction.START:
            return self.start()

        player = self._require_player()
        enemy = self.enemy
        if enemy is None:
            raise InvalidActionError("No encounter in progress; start one first.")
        if self.state is CombatState.RESOLVED:
            raise InvalidActionError("The encounter is over; start a new one.")

        if action is CombatAction.ATTACK:
            outcome = self._controller.attack(player, enemy)
        else:
            if card_id is None:
                raise InvalidActionError("castSpell requires a card id.")
            card = self.registry.get_card(card_id)
            if card is None:
                logger.warning("Rejected cast of unknown card id %r", card_id)
                raise UnknownCardError(f"Card not found: {card_id}")
            outcome = self._controller.cast_spell(player, enemy, card)

        if outcome.enemy_defeated:
            self.enemy = None
            player.clear_ongoing_effects()
        elif outcome.player_defeated:
            self._resolved = True
        return outcome

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_player(self) -> Character:
        if self.player is None:
            raise InvalidActionError("No character in play; create or load one first.")
        return self.player
