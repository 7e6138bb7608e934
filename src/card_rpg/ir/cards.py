"""Card definitions -- immutable catalog entries looked up by id."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel

from .effects import EffectDefinition


class CardType(str, Enum):
    """The card type tag."""

    SPELL = "spell"
    ATTACK = "attack"


class CardDefinition(BaseModel):
    """Complete definition of a single card."""

    id: int
    """Unique identifier used by the request boundary (``cardId``)."""

    name: str
    """Display name shown on the card."""

    mana_cost: int
    """Mana spent to cast the card."""

    type: CardType
    """Spell or attack."""

    description: str = ""
    """Card body text."""

    effects: list[EffectDefinition]
    """Effects applied in order when the card is cast."""

    model_config = {"frozen": True}
