"""
HTTP API Routes for Card Shoggoths.

Each request loads the session's game from the store, applies one engine
operation (plus the opponent's reply where it is the AI's turn), saves the
game and returns the human's view of it. Rule violations come back as
HTTP 400 with the engine's reason.
"""

from typing import Dict, Any, Optional
import logging
import uuid

from fastapi import APIRouter, HTTPException, Request, Response

from cardshoggoths.core.game import ActionResult, GameState, new_game
from cardshoggoths.server.schemas import (
    DealRequest, ActionRequest, DiscardRequest, ESPGuessRequest,
    GameStateSchema, ShowdownSchema, ESPGuessSchema, ErrorSchema,
)
from cardshoggoths.server.store import GameStore

router = APIRouter()

logger = logging.getLogger(__name__)

SESSION_COOKIE = "session_id"

ERROR_RESPONSES = {
    400: {"model": ErrorSchema, "description": "Move not allowed now"},
    404: {"model": ErrorSchema, "description": "No game for this session"},
}


def get_session_id(request: Request, response: Response) -> str:
    """Read the session cookie, minting a new session if there is none."""
    session_id = request.cookies.get(SESSION_COOKIE)
    if session_id:
        return session_id
    session_id = str(uuid.uuid4())
    response.set_cookie(
        SESSION_COOKIE,
        session_id,
        path="/",
        httponly=True,
        samesite="lax",
    )
    logger.info(f"New session {session_id}")
    return session_id


def get_store(request: Request) -> GameStore:
    return request.app.state.store


def create_game(request: Request, session_id: str) -> GameState:
    """A new game wired with the app's config and a fresh opponent."""
    state = request.app.state
    return new_game(config=state.game_config, agent=state.agent_factory(), game_id=session_id)


def require_game(store: GameStore, session_id: str) -> GameState:
    game = store.load(session_id)
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return game


def check(result: ActionResult) -> ActionResult:
    """Turn a rejected engine operation into HTTP 400."""
    if not result.success:
        raise HTTPException(status_code=400, detail=result.message)
    return result


@router.post("/api/deal", response_model=GameStateSchema, responses=ERROR_RESPONSES)
async def deal(
    request: Request,
    response: Response,
    req: Optional[DealRequest] = None,
) -> Dict[str, Any]:
    """
    Start a round: a new game for a new session, otherwise a new round.

    An ante the human cannot pay ends the game; the returned state shows it.
    """
    session_id = get_session_id(request, response)
    store = get_store(request)

    async with store.lock(session_id):
        game = store.load(session_id)
        if game is None:
            game = create_game(request, session_id)
        else:
            check(game.new_round())

        game.collect_ante(req.ante if req else None)
        store.save(session_id, game)
        return game.get_state()


@router.post("/api/bet", response_model=GameStateSchema, responses=ERROR_RESPONSES)
async def bet(request: Request, response: Response, req: ActionRequest) -> Dict[str, Any]:
    """Take a betting action; the opponent replies if the turn passes to it."""
    session_id = get_session_id(request, response)
    store = get_store(request)

    async with store.lock(session_id):
        game = require_game(store, session_id)
        check(game.player_action(req.action, req.amount))
        game.opponent_turn()
        store.save(session_id, game)
        return game.get_state()


@router.post("/api/discard", response_model=GameStateSchema, responses=ERROR_RESPONSES)
async def discard(request: Request, response: Response, req: DiscardRequest) -> Dict[str, Any]:
    """Exchange the human's chosen cards; the opponent draws too."""
    session_id = get_session_id(request, response)
    store = get_store(request)

    async with store.lock(session_id):
        game = require_game(store, session_id)
        if not game.can_discard():
            raise HTTPException(status_code=400, detail="Cannot discard now")
        check(game.perform_discard(req.indices))
        store.save(session_id, game)
        return game.get_state()


@router.post("/api/showdown", response_model=ShowdownSchema, responses=ERROR_RESPONSES)
async def showdown(request: Request, response: Response) -> Dict[str, Any]:
    """Settle the hand and report the result."""
    session_id = get_session_id(request, response)
    store = get_store(request)

    async with store.lock(session_id):
        game = require_game(store, session_id)
        if not game.can_showdown():
            raise HTTPException(status_code=400, detail="Cannot showdown now")
        result = check(game.complete_showdown())
        store.save(session_id, game)
        return {
            "winner": game.winner,
            "message": result.message,
            "state": game.get_state(),
        }


@router.post("/api/rebuy", response_model=GameStateSchema, responses=ERROR_RESPONSES)
async def rebuy(request: Request, response: Response) -> Dict[str, Any]:
    """Replace the session's game with a fresh one and deal."""
    session_id = get_session_id(request, response)
    store = get_store(request)

    async with store.lock(session_id):
        game = create_game(request, session_id)
        game.collect_ante()
        store.save(session_id, game)
        logger.info(f"Session {session_id} bought back in")
        return game.get_state()


@router.get("/api/state", response_model=GameStateSchema, responses=ERROR_RESPONSES)
async def get_state(request: Request, response: Response) -> Dict[str, Any]:
    """Get the current game state."""
    session_id = get_session_id(request, response)
    store = get_store(request)

    async with store.lock(session_id):
        return require_game(store, session_id).get_state()


# ============= ESP Minigame =============

@router.post("/api/esp/start", response_model=GameStateSchema, responses=ERROR_RESPONSES)
async def esp_start(request: Request, response: Response) -> Dict[str, Any]:
    session_id = get_session_id(request, response)
    store = get_store(request)

    async with store.lock(session_id):
        game = require_game(store, session_id)
        check(game.start_esp())
        store.save(session_id, game)
        return game.get_state()


@router.post("/api/esp/guess", response_model=ESPGuessSchema, responses=ERROR_RESPONSES)
async def esp_guess(request: Request, response: Response, req: ESPGuessRequest) -> Dict[str, Any]:
    session_id = get_session_id(request, response)
    store = get_store(request)

    async with store.lock(session_id):
        game = require_game(store, session_id)
        result = check(game.guess_esp(req.index1, req.index2))
        store.save(session_id, game)
        return {
            "correct": result.amount > 0,
            "sanity_change": result.amount,
            "message": result.message,
            "state": game.get_state(),
        }


@router.post("/api/esp/exit", response_model=GameStateSchema, responses=ERROR_RESPONSES)
async def esp_exit(request: Request, response: Response) -> Dict[str, Any]:
    session_id = get_session_id(request, response)
    store = get_store(request)

    async with store.lock(session_id):
        game = require_game(store, session_id)
        check(game.exit_esp())
        store.save(session_id, game)
        return game.get_state()


@router.post("/debug/clear-session")
async def clear_session(request: Request, response: Response) -> Dict[str, Any]:
    """Forget the session's game (for development/testing)."""
    session_id = get_session_id(request, response)
    store = get_store(request)

    async with store.lock(session_id):
        removed = store.delete(session_id)
    return {"success": True, "removed": removed}
