"""Runtime settings, read from ``CARD_RPG_*`` environment variables."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, field_validator

_ENV_PREFIX = "CARD_RPG_"


class Settings(BaseModel):
    """Server and engine configuration.

    Every field can be overridden by an environment variable named
    ``CARD_RPG_<FIELD>`` (e.g. ``CARD_RPG_PORT=9000``).
    """

    db_path: Path = Path("game.db")
    """SQLite file holding saved characters."""

    host: str = "0.0.0.0"
    port: int = 8080

    seed: int | None = None
    """Seed for the combat RNG.  ``None`` draws from the OS."""

    log_level: str = "INFO"

    static_dir: Path | None = None
    """Directory served at ``/`` (a browser client).  ``None`` disables it."""

    model_config = {"frozen": True}

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value!r}")
        return level

    @field_validator("port")
    @classmethod
    def _valid_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError(f"Port out of range: {value}")
        return value

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from *environ* (defaults to ``os.environ``).

        Unset or empty variables keep the field default.
        """
        environ = os.environ if environ is None else environ
        overrides = {}
        for field_name in cls.model_fields:
            raw = environ.get(_ENV_PREFIX + field_name.upper())
            if raw:
                overrides[field_name] = raw
        return cls(**overrides)
