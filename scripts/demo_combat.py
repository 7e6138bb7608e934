"""Combat walkthrough: run scripted encounters and check post-round state."""

import sys
sys.path.insert(0, "src")

from card_rpg.characters import apply_stat_boost, create_character, draw_stat_boost_card
from card_rpg.sim.content.registry import ContentRegistry
from card_rpg.sim.core.rng import GameRNG
from card_rpg.sim.session import EncounterSession


def load_registry():
    reg = ContentRegistry()
    reg.load_defaults()
    return reg


def separator(title):
    print(f"\n{'='*60}")
    print(f"  {title}")
    print(f"{'='*60}")


def show(outcome):
    print(f"  {outcome.result}")
    print(f"  -> player {outcome.player_hp} hp / {outcome.player_mana} mana, "
          f"enemy {outcome.enemy_hp} hp, over={outcome.combat_over}")


reg = load_registry()


# ============================================================
# Trace A: basic attacks until someone falls
# ============================================================
separator("TRACE A: Human Warrior vs Goblin, basic attacks only")

hero = create_character("Brom", "Warrior", "Human", reg)
session = EncounterSession(reg, GameRNG(7), player=hero)
show(session.start())

rounds = 0
while True:
    rounds += 1
    outcome = session.perform_action("attack")
    if outcome.combat_over:
        show(outcome)
        break

print(f"Finished after {rounds} rounds, xp={hero.xp}")
assert outcome.enemy_defeated or outcome.player_defeated
if outcome.enemy_defeated:
    assert hero.xp == 50
print("PASS: encounter resolved and XP matches the outcome")


# ============================================================
# Trace B: Fireball DoT keeps burning between rounds
# ============================================================
separator("TRACE B: Elf Mage, Fireball then basic attacks")

mage = create_character("Aria", "Mage", "Elf", reg)
session = EncounterSession(reg, GameRNG(13), player=mage)
session.start()

show(session.perform_action("castSpell", card_id=1))
assert session.enemy.active_dots[0].remaining_duration == 3
hp_before = session.enemy.health

show(session.perform_action("attack"))
burned = 3 + mage.stats.strength * 2
assert session.enemy.health == hp_before - burned
print(f"PASS: enemy lost exactly {burned} (tick + attack)")


# ============================================================
# Trace C: running out of mana
# ============================================================
separator("TRACE C: casting until the pool is empty")

for _ in range(30):
    outcome = session.perform_action("castSpell", card_id=4)
    if "Not enough mana" in outcome.result or outcome.combat_over:
        show(outcome)
        break

print(f"Mana left: {mage.mana}")
assert outcome.combat_over or mage.mana < 7
print("PASS: an unaffordable cast is refused")


# ============================================================
# Trace D: stat boosts
# ============================================================
separator("TRACE D: stat-boost cards")

rng = GameRNG(21)
hero = create_character("Pip", "Rogue", "Gnome", reg)
for stat in ("endurance", "intelligence", "luck"):
    boost = draw_stat_boost_card(rng)
    apply_stat_boost(hero, stat, boost)
    print(f"  +{boost} {stat}: health {hero.health}/{hero.max_health}, "
          f"mana {hero.mana}/{hero.max_mana}")

assert hero.health == hero.max_health == hero.stats.endurance * 10
assert hero.mana == hero.max_mana == hero.stats.intelligence * 5
print("PASS: full pools stay full after a boost")
