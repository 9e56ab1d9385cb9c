"""
Tests for the HTTP API.
"""

import pytest
from fastapi.testclient import TestClient

from cardshoggoths.config import AIConfig, GameConfig
from cardshoggoths.core.rules import AI_NAME
from cardshoggoths.server.app import create_app
from cardshoggoths.server.routes import SESSION_COOKIE


@pytest.fixture
def client():
    app = create_app(GameConfig(), AIConfig(discard_simulations=5))
    with TestClient(app) as client:
        yield client


@pytest.fixture
def dealt(client):
    response = client.post("/api/deal")
    assert response.status_code == 200
    return response.json()


def play_out(client, state):
    """Check or call through every betting round, standing pat on the draw."""
    for _ in range(20):
        public, private = state["public_info"], state["private_info"]
        if public["phase"] in ("complete", "game_over"):
            return state
        if public["phase"] == "discard":
            response = client.post("/api/discard", json={"indices": []})
        elif private["amount_to_call"] > 0:
            response = client.post("/api/bet", json={"action": "call"})
        else:
            response = client.post("/api/bet", json={"action": "check"})
        assert response.status_code == 200, response.text
        state = response.json()
    raise AssertionError("round did not finish")


class TestSession:
    """Tests for session handling."""

    def test_state_without_game(self, client):
        assert client.get("/api/state").status_code == 404

    def test_deal_sets_cookie(self, client):
        response = client.post("/api/deal")
        assert SESSION_COOKIE in response.cookies

    def test_sessions_are_separate(self, client, dealt):
        other = TestClient(client.app)
        assert other.get("/api/state").status_code == 404

    def test_clear_session(self, client, dealt):
        response = client.post("/debug/clear-session")
        assert response.json() == {"success": True, "removed": True}
        assert client.get("/api/state").status_code == 404

    def test_clear_session_keeps_session_lock(self, client, dealt):
        store = client.app.state.store
        session_id = client.cookies[SESSION_COOKIE]
        lock = store.lock(session_id)

        client.post("/debug/clear-session")

        assert not lock.locked()
        assert store.lock(session_id) is lock
        assert client.post("/api/deal").status_code == 200

    def test_error_responses_documented(self, client):
        schema = client.get("/openapi.json").json()
        bet = schema["paths"]["/api/bet"]["post"]["responses"]
        assert bet["400"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorSchema")
        assert "404" in bet


class TestDeal:
    """Tests for starting rounds."""

    def test_first_deal(self, dealt):
        public, private = dealt["public_info"], dealt["private_info"]
        assert public["phase"] == "bet_pre"
        assert public["pot"] == 20
        assert [p["sanity"] for p in public["players"]] == [90, 90]
        assert len(private["hand"]) == 5
        assert private["opponent_hand"] is None
        assert "fold" in private["available_moves"]

    def test_custom_ante(self, client):
        state = client.post("/api/deal", json={"ante": 5}).json()
        assert state["public_info"]["pot"] == 10

    def test_negative_ante_rejected(self, client):
        assert client.post("/api/deal", json={"ante": -5}).status_code == 422

    def test_deal_mid_hand_rejected(self, client, dealt):
        response = client.post("/api/deal")
        assert response.status_code == 400
        assert response.json()["detail"] == "Finish the current hand first."

    def test_state_matches_deal(self, client, dealt):
        assert client.get("/api/state").json() == dealt


class TestPlay:
    """Tests for betting, discarding and showdown."""

    def test_check_gets_reply(self, client, dealt):
        state = client.post("/api/bet", json={"action": "check"}).json()
        assert state["public_info"]["phase"] in ("bet_pre", "discard")
        assert state["public_info"]["turn"] == "player"

    def test_invalid_action(self, client, dealt):
        response = client.post("/api/bet", json={"action": "dance"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid action."

    def test_negative_amount(self, client, dealt):
        assert client.post("/api/bet", json={"action": "bet", "amount": -1}).status_code == 422

    def test_bet_without_game(self, client):
        assert client.post("/api/bet", json={"action": "check"}).status_code == 404

    def test_discard_wrong_phase(self, client, dealt):
        response = client.post("/api/discard", json={"indices": [0]})
        assert response.status_code == 400

    def test_showdown_wrong_phase(self, client, dealt):
        assert client.post("/api/showdown").status_code == 400

    def test_fold(self, client, dealt):
        state = client.post("/api/bet", json={"action": "fold"}).json()
        public = state["public_info"]
        assert public["phase"] == "complete"
        assert public["winner"] == AI_NAME
        assert [p["sanity"] for p in public["players"]] == [90, 110]
        assert len(state["private_info"]["opponent_hand"]) == 5

    def test_showdown_after_fold_reports_result(self, client, dealt):
        client.post("/api/bet", json={"action": "fold"})
        body = client.post("/api/showdown").json()
        assert body["winner"] == AI_NAME
        assert "folded" in body["message"]

    def test_full_round(self, client, dealt):
        state = play_out(client, dealt)
        public = state["public_info"]

        assert public["pot"] == 0
        assert sum(p["sanity"] for p in public["players"]) == 200
        assert public["winner"]

        body = client.post("/api/showdown").json()
        assert body["state"] == state

    def test_next_round(self, client, dealt):
        client.post("/api/bet", json={"action": "fold"})
        state = client.post("/api/deal").json()
        assert state["public_info"]["phase"] == "bet_pre"
        assert [p["sanity"] for p in state["public_info"]["players"]] == [80, 100]

    def test_rebuy(self, client, dealt):
        client.post("/api/bet", json={"action": "fold"})
        state = client.post("/api/rebuy").json()
        assert [p["sanity"] for p in state["public_info"]["players"]] == [90, 90]
        assert state["public_info"]["phase"] == "bet_pre"


class TestESPRoutes:
    """Tests for the ESP endpoints."""

    def test_start_and_exit(self, client, dealt):
        client.post("/api/bet", json={"action": "fold"})

        state = client.post("/api/esp/start").json()
        assert state["public_info"]["phase"] == "esp"
        assert state["private_info"]["esp"]["cards_per_row"] == 5

        state = client.post("/api/esp/exit").json()
        assert state["public_info"]["phase"] == "complete"
        assert state["private_info"]["esp"] is None

    def test_start_mid_hand(self, client, dealt):
        assert client.post("/api/esp/start").status_code == 400

    def test_guess(self, client, dealt):
        client.post("/api/bet", json={"action": "fold"})
        client.post("/api/esp/start")

        body = client.post("/api/esp/guess", json={"index1": 0, "index2": 0}).json()

        sanity = body["state"]["public_info"]["players"][0]["sanity"]
        if body["correct"]:
            assert body["sanity_change"] == 15
            assert sanity == 105
        else:
            assert body["sanity_change"] == -5
            assert sanity == 85

    def test_guess_out_of_range(self, client, dealt):
        client.post("/api/bet", json={"action": "fold"})
        client.post("/api/esp/start")
        assert client.post("/api/esp/guess", json={"index1": 7, "index2": 0}).status_code == 422

    def test_guess_outside_esp(self, client, dealt):
        assert client.post("/api/esp/guess", json={"index1": 0, "index2": 0}).status_code == 400
