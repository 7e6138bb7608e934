"""Tests for the combat round controller."""

import pytest

from card_rpg.ir.cards import CardDefinition, CardType
from card_rpg.ir.effects import EffectDefinition, EffectType
from card_rpg.sim.combat import CombatRoundController
from card_rpg.sim.core.entities import Character, Enemy, Stats


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_player(**kwargs) -> Character:
    defaults = dict(
        name="Aria",
        health=100,
        max_health=100,
        mana=20,
        max_mana=20,
        stats=Stats(strength=10),
    )
    defaults.update(kwargs)
    return Character(**defaults)


def _make_enemy(**kwargs) -> Enemy:
    defaults = dict(
        name="Goblin",
        enemy_id="goblin",
        health=300,
        max_health=300,
        strength=8,
        experience_reward=50,
    )
    defaults.update(kwargs)
    return Enemy(**defaults)


def _make_stun_card() -> CardDefinition:
    return CardDefinition(
        id=90,
        name="Concussive Blow",
        mana_cost=0,
        type=CardType.ATTACK,
        effects=[
            EffectDefinition(type=EffectType.DAMAGE, params={"amount": 10}),
            EffectDefinition(
                type=EffectType.STATUS_EFFECT,
                params={"effect": "stun", "chance": 1.0, "duration": 1},
            ),
        ],
    )


@pytest.fixture
def controller(make_rng) -> CombatRoundController:
    # 0.99 never beats a trigger chance below 1.0
    return CombatRoundController(make_rng(floats=[0.99]))


# ---------------------------------------------------------------------------
# Basic attack rounds
# ---------------------------------------------------------------------------

class TestAttackRound:
    def test_attack_and_retaliation(self, controller):
        hero, goblin = _make_player(), _make_enemy()
        outcome = controller.attack(hero, goblin)

        assert goblin.health == 280
        assert hero.health == 84
        assert outcome.enemy_hp == 280
        assert outcome.player_hp == 84
        assert outcome.combat_over is False
        assert "Aria attacks Goblin for 20 damage!" in outcome.result
        assert "Goblin attacks Aria for 16 damage!" in outcome.result

    def test_killing_blow_skips_retaliation(self, controller):
        hero, goblin = _make_player(), _make_enemy(health=15)
        outcome = controller.attack(hero, goblin)

        assert outcome.combat_over is True
        assert outcome.enemy_defeated is True
        assert hero.health == 100
        assert hero.xp == 50
        assert "You gain 50 XP" in outcome.result

    def test_retaliation_can_defeat_player(self, controller):
        hero, goblin = _make_player(health=10), _make_enemy()
        outcome = controller.attack(hero, goblin)

        assert hero.health == 0
        assert outcome.combat_over is True
        assert outcome.player_defeated is True
        assert outcome.enemy_defeated is False
        assert "Game over" in outcome.result


# ---------------------------------------------------------------------------
# Spell rounds
# ---------------------------------------------------------------------------

class TestCastSpellRound:
    def test_fireball_then_dot_finishes_enemy(self, controller, registry):
        hero = _make_player(mana=5)
        goblin = _make_enemy(health=12)
        fireball = registry.get_card(1)

        first = controller.cast_spell(hero, goblin, fireball)

        assert goblin.health == 2
        assert hero.mana == 0
        assert goblin.active_dots[0].amount == 3
        assert goblin.active_dots[0].remaining_duration == 3
        assert first.combat_over is False
        hp_after_first = hero.health

        second = controller.attack(hero, goblin)

        assert goblin.health == 0
        assert second.combat_over is True
        assert second.enemy_defeated is True
        assert hero.xp == 50
        # Enemy died on the tick; the player's attack never happened
        assert "attacks Goblin" not in second.result
        assert hero.health == hp_after_first

    def test_insufficient_mana_is_noop(self, controller, registry):
        hero = _make_player(mana=4)
        goblin = _make_enemy()
        outcome = controller.cast_spell(hero, goblin, registry.get_card(1))

        assert hero.mana == 4
        assert goblin.health == 300
        assert hero.health == 100
        assert outcome.combat_over is False
        assert "Not enough mana to cast Fireball" in outcome.result

    def test_cast_spends_mana_and_enemy_retaliates(self, controller, registry):
        hero = _make_player(mana=20)
        goblin = _make_enemy()
        outcome = controller.cast_spell(hero, goblin, registry.get_card(2))

        assert hero.mana == 16
        assert goblin.health == 292
        assert hero.health == 84
        assert outcome.player_mana == 16

    def test_shadow_strike_life_steal(self, controller, registry):
        hero = _make_player(health=50, mana=20)
        goblin = _make_enemy()
        controller.cast_spell(hero, goblin, registry.get_card(4))

        assert goblin.health == 288
        # +12 drained, -16 retaliation
        assert hero.health == 46
        assert hero.mana == 13


# ---------------------------------------------------------------------------
# Incapacitation and round-start ticks
# ---------------------------------------------------------------------------

class TestIncapacitation:
    def test_guaranteed_stun_skips_enemy_turn(self, controller):
        hero, goblin = _make_player(), _make_enemy()
        outcome = controller.cast_spell(hero, goblin, _make_stun_card())

        assert goblin.health == 290
        assert hero.health == 100
        assert "Goblin is stunned and skips its turn!" in outcome.result
        assert goblin.active_status[0].remaining_duration == 1

    def test_stun_expires_on_following_tick(self, controller):
        hero, goblin = _make_player(), _make_enemy()
        controller.cast_spell(hero, goblin, _make_stun_card())

        outcome = controller.attack(hero, goblin)

        assert goblin.active_status == []
        assert "no longer affected by stun" in outcome.result
        assert hero.health == 84

    def test_pre_existing_stun_ticks_before_retaliation(self, controller):
        hero, goblin = _make_player(), _make_enemy()
        goblin.apply_status_effect("stun", 1.0, 2)

        outcome = controller.attack(hero, goblin)

        # Duration 2 -> 1 at the tick; still active when the enemy acts
        assert hero.health == 100
        assert "stunned" in outcome.result

    def test_freeze_roll_uses_rng(self, make_rng):
        controller = CombatRoundController(make_rng(floats=[0.2]))
        hero, goblin = _make_player(), _make_enemy()
        goblin.apply_status_effect("freeze", 0.5, 2)

        outcome = controller.attack(hero, goblin)

        assert hero.health == 100
        assert "frozen" in outcome.result


class TestRoundStartTicks:
    def test_player_dot_can_end_round_before_action(self, controller):
        hero, goblin = _make_player(health=3), _make_enemy()
        hero.apply_dot(5, 2)

        outcome = controller.attack(hero, goblin)

        assert outcome.player_defeated is True
        assert goblin.health == 300

    def test_player_ticks_before_enemy(self, controller):
        hero, goblin = _make_player(health=3), _make_enemy(health=3)
        hero.apply_dot(5, 1)
        goblin.apply_dot(5, 1)

        outcome = controller.attack(hero, goblin)

        # The player's tick is lethal first; the enemy's never runs
        assert outcome.player_defeated is True
        assert outcome.enemy_defeated is False
        assert goblin.health == 3
        assert outcome.enemy_hp == 3
        assert goblin.active_dots[0].remaining_duration == 1
        assert hero.xp == 0

    def test_hot_ticks_before_action(self, controller):
        hero, goblin = _make_player(health=50), _make_enemy()
        hero.apply_hot(5, 2)

        controller.attack(hero, goblin)

        # +5 from the tick, -16 from the retaliation
        assert hero.health == 39
        assert hero.active_hots[0].remaining_duration == 1
