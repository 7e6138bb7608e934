"""Combatant models for the card-driven combat engine.

All data classes use Pydantic v2 BaseModel for validation and
serialization.  Field names are snake_case in Python and camelCase on the
wire (``maxHealth``, ``experienceReward``, ...).
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


_WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Ongoing-effect entries
# ---------------------------------------------------------------------------

class ActiveDoT(BaseModel):
    """Damage-over-time entry: ``amount`` health lost per tick."""

    model_config = _WIRE_CONFIG

    amount: int
    remaining_duration: int


class ActiveHoT(BaseModel):
    """Heal-over-time entry: ``amount`` health restored per tick."""

    model_config = _WIRE_CONFIG

    amount: int
    remaining_duration: int


class ActiveBuff(BaseModel):
    """Stored stat modifier.  Tracked and expired, never read by combat math."""

    model_config = _WIRE_CONFIG

    stat: str
    multiplier: float
    remaining_duration: int


class ActiveStatus(BaseModel):
    """Named, chance-gated condition such as ``"stun"`` or ``"freeze"``."""

    model_config = _WIRE_CONFIG

    effect_name: str
    trigger_chance: float
    remaining_duration: int


# ---------------------------------------------------------------------------
# Combatant base
# ---------------------------------------------------------------------------

class Combatant(BaseModel):
    """Common base for anything with health and ongoing effects.

    Health is clamped to ``[0, max_health]`` on construction and by every
    mutating method below.
    """

    model_config = _WIRE_CONFIG

    name: str
    health: int
    max_health: int
    active_dots: list[ActiveDoT] = Field(default_factory=list)
    active_hots: list[ActiveHoT] = Field(default_factory=list)
    active_buffs: list[ActiveBuff] = Field(default_factory=list)
    active_status: list[ActiveStatus] = Field(default_factory=list)

    @model_validator(mode="after")
    def _clamp_health(self) -> Combatant:
        if self.max_health < 0:
            raise ValueError(f"max_health must be >= 0, got {self.max_health}")
        self.health = max(0, min(self.health, self.max_health))
        return self

    # -- health queries ------------------------------------------------------

    @property
    def is_dead(self) -> bool:
        return self.health <= 0

    # -- damage / heal -------------------------------------------------------

    def set_health(self, value: int) -> None:
        """Assign health, clamped to ``[0, max_health]``."""
        self.health = max(0, min(int(value), self.max_health))

    def receive_damage(self, amount: int) -> int:
        """Lower health by *amount*, never below 0.

        Returns the nominal *amount* passed in, not the health actually
        lost.  Non-positive amounts leave health untouched.
        """
        if amount > 0:
            self.health = max(0, self.health - amount)
        return amount

    def heal(self, amount: int) -> None:
        """Heal *amount* health, capped at ``max_health``."""
        if amount <= 0:
            return
        self.health = min(self.max_health, self.health + amount)

    # -- ongoing effects -----------------------------------------------------

    def apply_dot(self, amount: int, duration: int) -> None:
        self.active_dots.append(ActiveDoT(amount=amount, remaining_duration=duration))

    def apply_hot(self, amount: int, duration: int) -> None:
        self.active_hots.append(ActiveHoT(amount=amount, remaining_duration=duration))

    def apply_buff(self, stat: str, multiplier: float, duration: int) -> None:
        self.active_buffs.append(
            ActiveBuff(stat=stat, multiplier=multiplier, remaining_duration=duration)
        )

    def apply_status_effect(self, effect_name: str, chance: float, duration: int) -> None:
        self.active_status.append(
            ActiveStatus(
                effect_name=effect_name,
                trigger_chance=chance,
                remaining_duration=duration,
            )
        )

    def clear_ongoing_effects(self) -> None:
        """Drop every DoT, HoT, buff, and status entry."""
        self.active_dots.clear()
        self.active_hots.clear()
        self.active_buffs.clear()
        self.active_status.clear()


# ---------------------------------------------------------------------------
# Character
# ---------------------------------------------------------------------------

class Stats(BaseModel):
    """The eight-attribute stat block."""

    strength: int = 0
    dexterity: int = 0
    intelligence: int = 0
    endurance: int = 0
    perception: int = 0
    wisdom: int = 0
    agility: int = 0
    luck: int = 0


class Character(Combatant):
    """The player-controlled character.  Persists across encounters."""

    character_class: str = Field(default="", alias="class")
    race: str = ""
    level: int = 1
    xp: int = 0
    mana: int = 0
    max_mana: int = 0
    gold: int = 0
    armor: str = ""
    weapon: str = ""
    stats: Stats = Field(default_factory=Stats)


# ---------------------------------------------------------------------------
# Enemy
# ---------------------------------------------------------------------------

class Enemy(Combatant):
    """The single opponent of an encounter."""

    enemy_id: str = ""
    """Identifier that ties this instance back to its template."""

    strength: int = 0
    dexterity: int = 0
    intelligence: int = 0
    armor: int = 0
    weapon: str = ""
    level: int = 1
    experience_reward: int = 0
