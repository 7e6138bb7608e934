"""Content registry -- loads and serves card definitions, the enemy template,
and the race/class tables for character creation.

Content ships as JSON files in the package's ``data/`` directory.  The
registry is read-only once loaded; nothing in combat mutates it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from card_rpg.ir.cards import CardDefinition, CardType
from card_rpg.ir.effects import EffectDefinition, EffectType
from card_rpg.sim.core.entities import Enemy

logger = logging.getLogger(__name__)

# Default paths relative to the package root.
_DATA_DIR = Path(__file__).resolve().parents[2] / "data"  # card_rpg/sim/content -> card_rpg/data
_DEFAULT_CARDS_PATH = _DATA_DIR / "cards.json"
_DEFAULT_ENEMIES_PATH = _DATA_DIR / "enemies.json"
_DEFAULT_CHARACTER_TABLES_PATH = _DATA_DIR / "character_tables.json"

DEFAULT_ENEMY_ID = "goblin"


def _parse_effect_definition(raw: dict[str, Any]) -> EffectDefinition:
    """Parse a raw JSON dict into an EffectDefinition."""
    return EffectDefinition(
        type=EffectType(raw["type"]),
        target=raw.get("target", "enemy"),
        params=dict(raw.get("params", {})),
        description=raw.get("description", ""),
    )


def _parse_card_definition(raw: dict[str, Any]) -> CardDefinition:
    """Parse a raw JSON dict into a CardDefinition with nested effect models."""
    effects = [_parse_effect_definition(e) for e in raw.get("effects", [])]

    return CardDefinition(
        id=raw["id"],
        name=raw["name"],
        mana_cost=raw["mana_cost"],
        type=CardType(raw["type"]),
        description=raw.get("description", ""),
        effects=effects,
    )


def _load_json(path: str | Path) -> Any:
    with open(Path(path), encoding="utf-8") as f:
        return json.load(f)


class ContentRegistry:
    """Loads and serves every piece of static game content.

    Usage::

        registry = ContentRegistry()
        registry.load_defaults()

        card = registry.get_card(1)
        goblin = registry.create_enemy()
        stats = registry.get_race_stats("Elf")
    """

    def __init__(self) -> None:
        self.cards: dict[int, CardDefinition] = {}
        self.enemies: dict[str, dict[str, Any]] = {}
        self.races: dict[str, dict[str, int]] = {}
        self.classes: dict[str, dict[str, Any]] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_defaults(self) -> None:
        """Load the packaged cards, enemy templates, and character tables."""
        self.load_cards()
        self.load_enemies()
        self.load_character_tables()

    def load_cards(self, path: str | Path | None = None) -> None:
        """Load card definitions from a JSON list.

        Parameters
        ----------
        path:
            Path to the JSON file.  Defaults to the packaged
            ``data/cards.json``.
        """
        raw_cards: list[dict[str, Any]] = _load_json(path or _DEFAULT_CARDS_PATH)

        for raw in raw_cards:
            if "_section" in raw:
                continue  # Skip organizational section markers
            card = _parse_card_definition(raw)
            if card.id in self.cards:
                logger.warning("Card id %d (%s) redefined", card.id, card.name)
            self.cards[card.id] = card

    def load_enemies(self, path: str | Path | None = None) -> None:
        """Load enemy templates from a JSON list keyed by ``id``."""
        raw_enemies: list[dict[str, Any]] = _load_json(path or _DEFAULT_ENEMIES_PATH)

        for raw in raw_enemies:
            if "_section" in raw:
                continue
            self.enemies[raw["id"]] = raw

    def load_character_tables(self, path: str | Path | None = None) -> None:
        """Load the race base-stat table and the class bonus table."""
        tables: dict[str, Any] = _load_json(path or _DEFAULT_CHARACTER_TABLES_PATH)
        self.races.update(tables.get("races", {}))
        self.classes.update(tables.get("classes", {}))

    # ------------------------------------------------------------------
    # Card queries
    # ------------------------------------------------------------------

    def get_card(self, card_id: int) -> CardDefinition | None:
        """Return the :class:`CardDefinition` for *card_id*, or ``None``."""
        return self.cards.get(card_id)

    # ------------------------------------------------------------------
    # Enemy queries
    # ------------------------------------------------------------------

    def get_enemy_data(self, enemy_id: str) -> dict[str, Any] | None:
        """Return the raw template for *enemy_id*, or ``None``."""
        return self.enemies.get(enemy_id)

    def create_enemy(self, enemy_id: str = DEFAULT_ENEMY_ID) -> Enemy:
        """Instantiate a fresh, full-health :class:`Enemy` from a template.

        Raises
        ------
        KeyError
            If no template is registered under *enemy_id*.
        """
        data = self.get_enemy_data(enemy_id)
        if data is None:
            raise KeyError(f"Unknown enemy template: {enemy_id!r}")

        return Enemy(
            enemy_id=data["id"],
            name=data["name"],
            health=data["max_health"],
            max_health=data["max_health"],
            strength=data.get("strength", 0),
            dexterity=data.get("dexterity", 0),
            intelligence=data.get("intelligence", 0),
            armor=data.get("armor", 0),
            weapon=data.get("weapon", ""),
            level=data.get("level", 1),
            experience_reward=data.get("experience_reward", 0),
        )

    # ------------------------------------------------------------------
    # Character tables
    # ------------------------------------------------------------------

    def get_race_stats(self, race: str) -> dict[str, int] | None:
        """Return the base stat block for *race*, or ``None``."""
        return self.races.get(race)

    def get_class_data(self, character_class: str) -> dict[str, Any] | None:
        """Return bonuses and starting gear for *character_class*, or ``None``."""
        return self.classes.get(character_class)
