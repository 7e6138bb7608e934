"""Static game content: cards, enemy templates, race/class tables."""
