"""card-rpg -- turn-based, card-driven combat engine for a role-playing encounter."""

__version__ = "0.1.0"
