"""Effect entries -- the ordered primitives a card applies when it is cast."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class EffectType(str, Enum):
    """Primitive effect types understood by the effect applicator."""

    DAMAGE = "damage"
    HEAL = "heal"
    DAMAGE_OVER_TIME = "damageOverTime"
    HEAL_OVER_TIME = "healOverTime"
    BUFF = "buff"
    STATUS_EFFECT = "statusEffect"
    LIFE_STEAL = "lifeSteal"


class EffectTarget(str, Enum):
    """Valid target selectors.  ``self`` is the caster, ``enemy`` the opponent."""

    SELF = "self"
    ENEMY = "enemy"


class EffectDefinition(BaseModel):
    """A single effect entry on a card.

    ``target`` is kept as a plain string so that catalog data naming an
    unknown selector still loads; the applicator rejects it when the card is
    cast.
    """

    type: EffectType
    """Which primitive this entry represents."""

    target: str = EffectTarget.ENEMY.value
    """Who the effect lands on: ``'self'`` or ``'enemy'``."""

    params: dict[str, Any] = Field(default_factory=dict)
    """Named parameters -- ``amount``, ``duration``, ``stat``, ``modifier``,
    ``effect``, ``chance`` -- depending on ``type``."""

    description: str = ""
    """Human-readable summary shown next to the card."""

    model_config = {"frozen": True}
