"""
Tests for the WebSocket protocol.
"""

import pytest
from fastapi.testclient import TestClient

from pokeradvisor.server.app import create_app
from pokeradvisor.server.websocket import table_manager


@pytest.fixture
def client():
    return TestClient(create_app())


@pytest.fixture
def table_id():
    table_id, _ = table_manager.create_table(num_ai_players=2, seed=3)
    yield table_id
    table_manager.remove_table(table_id)


def receive_until(websocket, msg_type):
    """Skip broadcasts until a message of the given type arrives."""
    while True:
        message = websocket.receive_json()
        if message["type"] == msg_type:
            return message


class TestWebSocket:

    def test_join_sends_state(self, client, table_id):
        with client.websocket_connect("/ws") as websocket:
            websocket.send_json({"type": "join", "table_id": table_id, "player_id": "human"})
            message = websocket.receive_json()
            assert message["type"] == "state"
            assert message["table_id"] == table_id

    def test_first_message_must_be_join(self, client):
        with client.websocket_connect("/ws") as websocket:
            websocket.send_json({"type": "get_state"})
            message = websocket.receive_json()
            assert message["type"] == "error"

    def test_join_unknown_table_creates_one(self, client):
        with client.websocket_connect("/ws") as websocket:
            websocket.send_json({"type": "join", "table_id": "missing", "player_id": "human"})
            message = websocket.receive_json()
            assert message["type"] == "state"
            assert message["table_id"] != "missing"
            assert table_manager.get_room(message["table_id"]) is not None

    def test_start_hand_and_act(self, client, table_id):
        with client.websocket_connect("/ws") as websocket:
            websocket.send_json({"type": "join", "table_id": table_id, "player_id": "human"})
            websocket.receive_json()

            websocket.send_json({"type": "start_hand"})
            state = receive_until(websocket, "state")
            assert state["current_player"] == "human"
            assert state["recommendation"] is not None
            started = receive_until(websocket, "hand_started")
            assert started["hand_number"] == 1

            websocket.send_json({"type": "get_recommendation"})
            advice = receive_until(websocket, "recommendation")
            assert advice["recommendation"]["action"] in {"fold", "call", "raise"}

            websocket.send_json({"type": "action", "action": "fold"})
            result = receive_until(websocket, "action_result")
            assert result["success"]
            assert result["action"] == "fold"

    def test_errors(self, client, table_id):
        with client.websocket_connect("/ws") as websocket:
            websocket.send_json({"type": "join", "table_id": table_id, "player_id": "human"})
            websocket.receive_json()

            websocket.send_json({"type": "dance"})
            assert websocket.receive_json()["type"] == "error"

            # No hand has been dealt yet
            websocket.send_json({"type": "action", "action": "call"})
            assert websocket.receive_json()["type"] == "error"

    def test_non_numeric_amount_keeps_connection(self, client, table_id):
        with client.websocket_connect("/ws") as websocket:
            websocket.send_json({"type": "join", "table_id": table_id, "player_id": "human"})
            websocket.receive_json()

            websocket.send_json({"type": "start_hand"})
            receive_until(websocket, "hand_started")

            websocket.send_json({"type": "action", "action": "raise", "amount": "lots"})
            error = websocket.receive_json()
            assert error["type"] == "error"
            assert "lots" in error["message"]

            websocket.send_json({"type": "get_state"})
            state = websocket.receive_json()
            assert state["type"] == "state"
            assert state["current_player"] == "human"

    def test_spectator_never_sees_human_cards(self, client, table_id):
        with client.websocket_connect("/ws") as websocket:
            websocket.send_json({"type": "join", "table_id": table_id, "player_id": "spectator"})
            websocket.receive_json()

            websocket.send_json({"type": "start_hand"})
            state = receive_until(websocket, "state")
            assert state["current_player"] == "human"
            cards = {p["id"]: p["cards"] for p in state["players"]}
            assert cards["human"] is None
            assert all(c is None for c in cards.values())
