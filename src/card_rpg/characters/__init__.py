"""Character creation and progression helpers."""

from .creation import create_character
from .stat_boosts import apply_stat_boost, draw_stat_boost_card

__all__ = [
    "create_character",
    "apply_stat_boost",
    "draw_stat_boost_card",
]
