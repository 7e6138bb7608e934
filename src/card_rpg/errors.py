"""Engine and service exceptions."""


class InvalidActionError(ValueError):
    """Raised when a combat action is unknown or not allowed in the current state."""


class UnknownCardError(LookupError):
    """Raised when a spell cast references a card id missing from the catalog."""


class CharacterCreationError(ValueError):
    """Raised when a character cannot be built from the race/class tables."""


class StatBoostError(ValueError):
    """Raised when a stat boost names an unknown stat or an out-of-range value."""


class SaveLoadError(Exception):
    """Raised when the character record cannot be saved or loaded."""
