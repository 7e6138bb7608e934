"""Tests for the card effect applicator."""

import pytest

from card_rpg.ir.cards import CardDefinition, CardType
from card_rpg.ir.effects import EffectDefinition, EffectType
from card_rpg.sim.core.entities import Character, Enemy
from card_rpg.sim.interpreter import EffectApplicator


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_player(**kwargs) -> Character:
    defaults = dict(name="Aria", health=100, max_health=100, mana=50, max_mana=50)
    defaults.update(kwargs)
    return Character(**defaults)


def _make_enemy(**kwargs) -> Enemy:
    defaults = dict(name="Goblin", enemy_id="goblin", health=300, max_health=300, strength=8)
    defaults.update(kwargs)
    return Enemy(**defaults)


def _effect(effect_type: EffectType, target: str = "enemy", **params) -> EffectDefinition:
    return EffectDefinition(type=effect_type, target=target, params=params)


def _make_card(*effects: EffectDefinition, name: str = "Test Card") -> CardDefinition:
    return CardDefinition(id=99, name=name, mana_cost=0, type=CardType.SPELL, effects=list(effects))


@pytest.fixture
def applicator() -> EffectApplicator:
    return EffectApplicator()


# ---------------------------------------------------------------------------
# Instant effects
# ---------------------------------------------------------------------------

class TestInstantEffects:
    def test_damage(self, applicator):
        hero, goblin = _make_player(), _make_enemy()
        narration = applicator.apply_effect(_effect(EffectType.DAMAGE, amount=10), hero, goblin)

        assert goblin.health == 290
        assert narration == "Goblin takes 10 damage."

    def test_heal_self(self, applicator):
        hero, goblin = _make_player(health=60), _make_enemy()
        applicator.apply_effect(_effect(EffectType.HEAL, "self", amount=15), hero, goblin)
        assert hero.health == 75

    def test_heal_capped(self, applicator):
        hero, goblin = _make_player(health=95), _make_enemy()
        applicator.apply_effect(_effect(EffectType.HEAL, "self", amount=15), hero, goblin)
        assert hero.health == 100

    def test_damage_can_target_self(self, applicator):
        hero, goblin = _make_player(), _make_enemy()
        applicator.apply_effect(_effect(EffectType.DAMAGE, "self", amount=7), hero, goblin)

        assert hero.health == 93
        assert goblin.health == 300


# ---------------------------------------------------------------------------
# Ongoing effects
# ---------------------------------------------------------------------------

class TestOngoingRegistration:
    def test_damage_over_time(self, applicator):
        hero, goblin = _make_player(), _make_enemy()
        applicator.apply_effect(
            _effect(EffectType.DAMAGE_OVER_TIME, amount=3, duration=3), hero, goblin
        )

        assert goblin.health == 300
        assert goblin.active_dots[0].amount == 3
        assert goblin.active_dots[0].remaining_duration == 3

    def test_heal_over_time(self, applicator):
        hero, goblin = _make_player(), _make_enemy()
        applicator.apply_effect(
            _effect(EffectType.HEAL_OVER_TIME, "self", amount=5, duration=3), hero, goblin
        )
        assert hero.active_hots[0].amount == 5

    def test_buff(self, applicator):
        hero, goblin = _make_player(), _make_enemy()
        narration = applicator.apply_effect(
            _effect(EffectType.BUFF, "self", stat="wisdom", modifier=1.2, duration=3),
            hero,
            goblin,
        )

        buff = hero.active_buffs[0]
        assert buff.stat == "wisdom"
        assert buff.multiplier == pytest.approx(1.2)
        assert buff.remaining_duration == 3
        assert "x1.2" in narration

    def test_status_effect(self, applicator):
        hero, goblin = _make_player(), _make_enemy()
        applicator.apply_effect(
            _effect(EffectType.STATUS_EFFECT, effect="freeze", chance=0.5, duration=2),
            hero,
            goblin,
        )

        status = goblin.active_status[0]
        assert status.effect_name == "freeze"
        assert status.trigger_chance == pytest.approx(0.5)
        assert status.remaining_duration == 2


# ---------------------------------------------------------------------------
# Life steal
# ---------------------------------------------------------------------------

class TestLifeSteal:
    def test_drains_enemy_and_heals_caster(self, applicator):
        hero, goblin = _make_player(health=50), _make_enemy()
        applicator.apply_effect(_effect(EffectType.LIFE_STEAL, amount=12), hero, goblin)

        assert goblin.health == 288
        assert hero.health == 62

    def test_heals_nominal_amount_on_low_target(self, applicator):
        hero, goblin = _make_player(health=50), _make_enemy(health=5)
        applicator.apply_effect(_effect(EffectType.LIFE_STEAL, amount=12), hero, goblin)

        assert goblin.health == 0
        assert hero.health == 62

    def test_heal_capped_at_max(self, applicator):
        hero, goblin = _make_player(health=95), _make_enemy()
        applicator.apply_effect(_effect(EffectType.LIFE_STEAL, amount=12), hero, goblin)
        assert hero.health == 100


# ---------------------------------------------------------------------------
# Bad entries are narrated and skipped
# ---------------------------------------------------------------------------

class TestSkippedEffects:
    def test_invalid_target_skipped(self, applicator):
        hero, goblin = _make_player(), _make_enemy()
        narration = applicator.apply_effect(
            _effect(EffectType.DAMAGE, "ally", amount=10), hero, goblin
        )

        assert goblin.health == 300
        assert hero.health == 100
        assert "Invalid target 'ally'" in narration

    def test_missing_parameter_skipped(self, applicator):
        hero, goblin = _make_player(), _make_enemy()
        narration = applicator.apply_effect(_effect(EffectType.DAMAGE), hero, goblin)

        assert goblin.health == 300
        assert "Malformed damage effect" in narration
        assert "amount" in narration

    def test_non_numeric_parameter_skipped(self, applicator):
        hero, goblin = _make_player(), _make_enemy()
        narration = applicator.apply_effect(
            _effect(EffectType.DAMAGE_OVER_TIME, amount="lots", duration=3), hero, goblin
        )

        assert goblin.active_dots == []
        assert "Malformed" in narration

    def test_bool_parameter_rejected(self, applicator):
        hero, goblin = _make_player(), _make_enemy()
        applicator.apply_effect(_effect(EffectType.DAMAGE, amount=True), hero, goblin)
        assert goblin.health == 300

    def test_blank_status_name_rejected(self, applicator):
        hero, goblin = _make_player(), _make_enemy()
        applicator.apply_effect(
            _effect(EffectType.STATUS_EFFECT, effect="", chance=1.0, duration=1), hero, goblin
        )
        assert goblin.active_status == []

    def test_float_amount_truncated(self, applicator):
        hero, goblin = _make_player(), _make_enemy()
        applicator.apply_effect(_effect(EffectType.DAMAGE, amount=10.7), hero, goblin)
        assert goblin.health == 290

    def test_bad_entry_does_not_stop_card(self, applicator):
        hero, goblin = _make_player(), _make_enemy()
        card = _make_card(
            _effect(EffectType.DAMAGE, "nowhere", amount=50),
            _effect(EffectType.DAMAGE, amount=10),
        )
        narration = applicator.apply_card_effects(card, hero, goblin)

        assert goblin.health == 290
        assert "Invalid target" in narration
        assert "Goblin takes 10 damage." in narration


# ---------------------------------------------------------------------------
# Whole cards
# ---------------------------------------------------------------------------

class TestApplyCardEffects:
    def test_effects_apply_in_order(self, applicator):
        hero, goblin = _make_player(), _make_enemy()
        card = _make_card(
            _effect(EffectType.DAMAGE, amount=10),
            _effect(EffectType.DAMAGE_OVER_TIME, amount=3, duration=3),
            name="Fireball",
        )
        narration = applicator.apply_card_effects(card, hero, goblin)

        assert narration.startswith("Aria casts Fireball!")
        assert narration.index("takes 10 damage") < narration.index("3 damage per turn")
        assert goblin.health == 290
        assert len(goblin.active_dots) == 1

    def test_remaining_effects_apply_after_enemy_dies(self, applicator):
        hero, goblin = _make_player(), _make_enemy(health=5)
        card = _make_card(
            _effect(EffectType.DAMAGE, amount=10),
            _effect(EffectType.STATUS_EFFECT, effect="stun", chance=0.25, duration=1),
        )
        applicator.apply_card_effects(card, hero, goblin)

        assert goblin.is_dead
        assert len(goblin.active_status) == 1

    def test_packaged_healing_light(self, applicator, registry):
        hero, goblin = _make_player(health=50), _make_enemy()
        applicator.apply_card_effects(registry.get_card(3), hero, goblin)

        assert hero.health == 65
        assert hero.active_hots[0].amount == 5
        assert hero.active_buffs[0].stat == "wisdom"
        assert goblin.health == 300
