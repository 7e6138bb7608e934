"""HTTP boundary -- FastAPI app that owns the character and encounter session.

Run with ``card-rpg-server`` (or ``python -m card_rpg.web.server``); every
setting comes from :class:`~card_rpg.config.Settings`.
"""

from __future__ import annotations

import logging
import threading

import uvicorn
from fastapi import Body, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ConfigDict, Field

from card_rpg import __version__
from card_rpg.characters import apply_stat_boost, create_character, draw_stat_boost_card
from card_rpg.config import Settings
from card_rpg.errors import (
    CharacterCreationError,
    InvalidActionError,
    SaveLoadError,
    StatBoostError,
    UnknownCardError,
)
from card_rpg.sim.combat import RoundOutcome
from card_rpg.sim.content.registry import ContentRegistry
from card_rpg.sim.core.entities import Character
from card_rpg.sim.core.rng import GameRNG
from card_rpg.sim.session import CombatAction, EncounterSession
from card_rpg.storage import PlayerStore

logger = logging.getLogger(__name__)


# ============================================================================
# REQUEST / RESPONSE MODELS
# ============================================================================

class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreateCharacterRequest(_Request):
    name: str
    character_class: str = Field(alias="class")
    race: str


class StatBoostRequest(_Request):
    card: int
    chosen_stat: str = Field(alias="chosenStat")


class CombatRequest(_Request):
    action: str
    card_id: int | None = Field(default=None, alias="cardId")


class UseCardRequest(_Request):
    card_id: int = Field(alias="cardId")


class LoadRequest(_Request):
    name: str = ""


class RoundPayload(BaseModel):
    """Round result as the browser client reads it."""

    model_config = ConfigDict(populate_by_name=True)

    result: str
    player_hp: int = Field(alias="playerHP")
    enemy_hp: int = Field(alias="enemyHP")
    player_mana: int = Field(alias="playerMana")
    combat_over: bool = Field(alias="combatOver")
    player: Character


# ============================================================================
# GAME STATE
# ============================================================================

class GameServer:
    """The single in-play character and its encounter session.

    Request handlers run on a thread pool, so every read-modify-write of
    the session happens under :attr:`lock`.
    """

    def __init__(self, registry: ContentRegistry, store: PlayerStore, rng: GameRNG) -> None:
        self.registry = registry
        self.store = store
        self.rng = rng
        self.session = EncounterSession(registry, rng)
        self.lock = threading.Lock()

    def set_player(self, character: Character) -> None:
        """Put *character* in play; any encounter with the previous one ends."""
        self.session.player = character
        self.session.enemy = None

    def require_player(self) -> Character:
        if self.session.player is None:
            raise HTTPException(status_code=400, detail="No character created")
        return self.session.player

    def run_action(self, action: str, card_id: int | None = None) -> RoundPayload:
        try:
            outcome = self.session.perform_action(action, card_id)
        except UnknownCardError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except InvalidActionError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        return self._payload(outcome)

    def _payload(self, outcome: RoundOutcome) -> RoundPayload:
        return RoundPayload(
            result=outcome.result,
            player_hp=outcome.player_hp,
            enemy_hp=outcome.enemy_hp,
            player_mana=outcome.player_mana,
            combat_over=outcome.combat_over,
            player=self.require_player(),
        )


# ============================================================================
# APP FACTORY
# ============================================================================

def create_app(
    settings: Settings | None = None,
    store: PlayerStore | None = None,
    rng: GameRNG | None = None,
) -> FastAPI:
    """Build the FastAPI app.

    Parameters
    ----------
    settings:
        Runtime settings.  Read from the environment if omitted.
    store:
        Player store.  Opened at ``settings.db_path`` if omitted.
    rng:
        Combat RNG.  Seeded from ``settings.seed`` if omitted.
    """
    settings = settings or Settings.from_env()
    registry = ContentRegistry()
    registry.load_defaults()
    game = GameServer(
        registry,
        store or PlayerStore(settings.db_path),
        rng or GameRNG(settings.seed),
    )

    app = FastAPI(title="Card RPG", version=__version__)
    app.state.game = game
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -- character ---------------------------------------------------------

    @app.post("/create-character", response_model=Character)
    def create_character_route(request: CreateCharacterRequest) -> Character:
        try:
            character = create_character(
                request.name, request.character_class, request.race, game.registry
            )
        except CharacterCreationError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        with game.lock:
            game.set_player(character)
            _save(game.store, character)
        return character

    @app.get("/character", response_model=Character)
    def get_character() -> Character:
        with game.lock:
            return game.require_player()

    @app.post("/apply-stat-boost", response_model=Character)
    def apply_stat_boost_route(request: StatBoostRequest) -> Character:
        with game.lock:
            player = game.require_player()
            try:
                return apply_stat_boost(player, request.chosen_stat, request.card)
            except StatBoostError as exc:
                raise HTTPException(status_code=400, detail=str(exc)) from exc

    @app.get("/randomize-card")
    def randomize_card() -> int:
        with game.lock:
            return draw_stat_boost_card(game.rng)

    # -- combat ------------------------------------------------------------

    @app.post("/start-combat", response_model=RoundPayload)
    def start_combat(request: CombatRequest) -> RoundPayload:
        with game.lock:
            game.require_player()
            return game.run_action(request.action, request.card_id)

    @app.post("/use-card", response_model=RoundPayload)
    def use_card(request: UseCardRequest) -> RoundPayload:
        with game.lock:
            game.require_player()
            return game.run_action(CombatAction.CAST_SPELL, request.card_id)

    # -- persistence -------------------------------------------------------

    @app.post("/save-progress", response_class=PlainTextResponse)
    def save_progress(character: Character | None = Body(default=None)) -> str:
        with game.lock:
            _save(game.store, character or game.require_player())
        return "Progress saved successfully"

    @app.get("/load-progress", response_model=Character)
    def load_progress_query(name: str = Query(default="")) -> Character:
        return _load_into(game, name)

    @app.post("/load-progress", response_model=Character)
    def load_progress_body(request: LoadRequest) -> Character:
        return _load_into(game, request.name)

    if settings.static_dir is not None:
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    return app


def _save(store: PlayerStore, character: Character) -> None:
    try:
        store.save(character)
    except SaveLoadError as exc:
        logger.error("Save failed: %s", exc)
        raise HTTPException(status_code=500, detail="Error saving progress") from exc


def _load_into(game: GameServer, name: str) -> Character:
    if not name:
        raise HTTPException(status_code=400, detail="Player name is required")
    with game.lock:
        try:
            character = game.store.load(name)
        except SaveLoadError as exc:
            logger.error("Load failed: %s", exc)
            raise HTTPException(status_code=500, detail="Error loading progress") from exc
        if character is None:
            raise HTTPException(status_code=404, detail="Player not found")
        game.set_player(character)
        logger.info("Loaded progress for %s", character.name)
        return character


# ============================================================================
# MAIN
# ============================================================================

def main() -> None:
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Serving on http://%s:%d (db=%s)", settings.host, settings.port, settings.db_path)
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
