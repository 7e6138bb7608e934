"""HTTP boundary for the card RPG."""

from card_rpg.web.server import create_app

__all__ = ["create_app"]
