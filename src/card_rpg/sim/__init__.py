"""Combat simulation: combatants, ongoing effects, effect application, rounds."""
