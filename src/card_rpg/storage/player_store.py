"""Character persistence -- one JSON document per player name in SQLite.

The combat core never touches the store; the boundary saves the mutated
character whenever it chooses to.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import closing
from pathlib import Path

from pydantic import ValidationError

from card_rpg.errors import SaveLoadError
from card_rpg.sim.core.entities import Character

logger = logging.getLogger(__name__)

_CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS players (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE,
    data TEXT NOT NULL
);
"""

_UPSERT_SQL = """
INSERT INTO players (name, data) VALUES (?, ?)
ON CONFLICT(name) DO UPDATE SET data=excluded.data;
"""

_SELECT_SQL = "SELECT data FROM players WHERE name = ?;"


class PlayerStore:
    """Save and load :class:`Character` records keyed by name.

    Parameters
    ----------
    path:
        SQLite database file.  The ``players`` table is created on first use.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = str(path)
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(_CREATE_TABLE_SQL)
        except sqlite3.Error as exc:
            raise SaveLoadError(f"Cannot open player store at {self._path}: {exc}") from exc

    @property
    def path(self) -> str:
        return self._path

    def save(self, character: Character) -> None:
        """Insert or replace the record for ``character.name``."""
        data = character.model_dump_json(by_alias=True)
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(_UPSERT_SQL, (character.name, data))
        except sqlite3.Error as exc:
            raise SaveLoadError(f"Error saving {character.name!r}: {exc}") from exc
        logger.info("Saved progress for %s", character.name)

    def load(self, name: str) -> Character | None:
        """Return the stored character called *name*, or ``None``."""
        try:
            with closing(self._connect()) as conn:
                row = conn.execute(_SELECT_SQL, (name,)).fetchone()
        except sqlite3.Error as exc:
            raise SaveLoadError(f"Error loading {name!r}: {exc}") from exc

        if row is None:
            return None
        try:
            return Character.model_validate_json(row[0])
        except ValidationError as exc:
            raise SaveLoadError(f"Stored record for {name!r} is corrupt: {exc}") from exc

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._path)
