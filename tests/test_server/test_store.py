"""
Tests for the session game store.
"""

from cardshoggoths.core.game import GameState
from cardshoggoths.server.store import GameStore


class TestGameStore:
    """Tests for saving and loading games."""

    def test_load_missing(self):
        assert GameStore().load("nobody") is None

    def test_save_and_load(self, dealt_game):
        store = GameStore()
        store.save("abc", dealt_game)

        loaded = store.load("abc")

        assert isinstance(loaded, GameState)
        assert loaded.id == "abc"
        assert loaded.to_dict() == dealt_game.to_dict()
        assert "abc" in store
        assert len(store) == 1

    def test_loads_are_independent(self, dealt_game):
        store = GameStore()
        store.save("abc", dealt_game)

        first = store.load("abc")
        first.player_action("fold")

        assert store.load("abc").phase == dealt_game.phase

    def test_loader_attaches_agent(self, dealt_game, scripted_agent):
        store = GameStore(loader=lambda data: GameState.from_dict(data, agent=scripted_agent))
        store.save("abc", dealt_game)
        assert store.load("abc").agent is scripted_agent

    def test_delete(self, dealt_game):
        store = GameStore()
        store.save("abc", dealt_game)
        assert store.delete("abc")
        assert not store.delete("abc")
        assert "abc" not in store

    def test_delete_keeps_lock(self, dealt_game):
        store = GameStore()
        lock = store.lock("abc")
        store.save("abc", dealt_game)
        store.delete("abc")
        assert store.lock("abc") is lock

    def test_lock_per_session(self):
        store = GameStore()
        assert store.lock("a") is store.lock("a")
        assert store.lock("a") is not store.lock("b")
