"""
Session storage for games.

Games are kept as JSON text, exactly what GameState.to_dict() produces, so
every request works on a game rebuilt from its flat snapshot. One asyncio
lock per session serializes concurrent requests against the same game;
different sessions never share a lock.
"""

from __future__ import annotations
from typing import Callable, Dict, Optional
import asyncio
import json
import logging

from cardshoggoths.core.game import GameState


logger = logging.getLogger(__name__)


class GameStore:
    """
    In-memory game store keyed by session id.

    Usage:
        store = GameStore(loader=lambda data: GameState.from_dict(data, agent=agent))
        async with store.lock(session_id):
            game = store.load(session_id)
            ...
            store.save(session_id, game)
    """

    def __init__(self, loader: Optional[Callable[[dict], GameState]] = None):
        """
        Args:
            loader: Builds a GameState from a snapshot dict, letting the host
                attach its agent and config (GameState.from_dict if omitted)
        """
        self._games: Dict[str, str] = {}
        self._locks: Dict[str, asyncio.Lock] = {}
        self._loader = loader or GameState.from_dict

    def lock(self, session_id: str) -> asyncio.Lock:
        """The lock guarding one session."""
        if session_id not in self._locks:
            self._locks[session_id] = asyncio.Lock()
        return self._locks[session_id]

    def save(self, session_id: str, game: GameState) -> None:
        game.id = session_id
        self._games[session_id] = json.dumps(game.to_dict())
        logger.debug(f"Saved game for session {session_id}")

    def load(self, session_id: str) -> Optional[GameState]:
        raw = self._games.get(session_id)
        if raw is None:
            logger.debug(f"No game for session {session_id}")
            return None
        return self._loader(json.loads(raw))

    def delete(self, session_id: str) -> bool:
        """Forget a session's game. Its lock stays, so waiters still serialize."""
        return self._games.pop(session_id, None) is not None

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._games

    def __len__(self) -> int:
        return len(self._games)
