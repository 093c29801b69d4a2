"""
WebSocket handling for real-time table communication.

This module provides:
- TableManager: owns every table and its connected clients
- WebSocket endpoint: joins a client to a table and relays its messages
"""

from __future__ import annotations
from typing import Dict, Optional, Any, Tuple
from dataclasses import dataclass, field
import asyncio
import logging

from fastapi import WebSocket, WebSocketDisconnect

from pokeradvisor.core.exceptions import IllegalActionError, HandStateError
from pokeradvisor.table import Table, create_table


logger = logging.getLogger(__name__)


def table_state(table: Table, viewer_id: Optional[str] = None) -> Dict[str, Any]:
    """Table view for one viewer, with advice when it is a human seat's turn."""
    state = table.view(viewer_id)
    actor = table.current_player
    if actor is not None and actor.is_human:
        state["recommendation"] = table.recommendation().to_dict()
    else:
        state["recommendation"] = None
    return state


@dataclass
class TableRoom:
    """A table with its connected clients; the lock serializes play on it."""
    table_id: str
    table: Table
    connections: Dict[str, WebSocket] = field(default_factory=dict)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    async def broadcast(self, message: Dict[str, Any], exclude: Optional[str] = None):
        """Broadcast a message to all connected clients."""
        for player_id, ws in list(self.connections.items()):
            if player_id != exclude:
                try:
                    await ws.send_json(message)
                except (WebSocketDisconnect, RuntimeError) as e:
                    logger.error(f"Error sending to {player_id}: {e}")

    async def send_state_to_all(self):
        """Send each client the table as they are allowed to see it."""
        for player_id, ws in list(self.connections.items()):
            try:
                await ws.send_json({"type": "state", **table_state(self.table, player_id)})
            except (WebSocketDisconnect, RuntimeError) as e:
                logger.error(f"Error sending state to {player_id}: {e}")

    async def send_result(self):
        """Send the result of the hand that just finished."""
        summary = self.table.summary()
        if summary is None or self.table.state is None:
            return
        await self.broadcast({
            "type": "result",
            "summary": summary.to_dict(),
            "payouts": dict(self.table.state.payouts),
            "board": [c.to_dict() for c in self.table.state.community_cards],
        })


class TableManager:
    """
    Manages tables and client connections.

    Usage:
        manager = TableManager()
        table_id, room = manager.create_table(num_ai_players=3)
        await manager.handle_message(table_id, player_id, message)
    """

    def __init__(self):
        self.rooms: Dict[str, TableRoom] = {}
        self._table_counter = 0

    def create_table(self, **options: Any) -> Tuple[str, TableRoom]:
        """
        Seat a new table; options are passed to create_table().

        Raises:
            ValueError: For invalid blinds or table size
        """
        self._table_counter += 1
        table_id = f"table-{self._table_counter}"
        table = create_table(table_id=table_id, **options)
        room = TableRoom(table_id=table_id, table=table)
        self.rooms[table_id] = room
        logger.info(f"Created {table_id} with {len(table.players)} players")
        return table_id, room

    def get_room(self, table_id: str) -> Optional[TableRoom]:
        return self.rooms.get(table_id)

    def remove_table(self, table_id: str) -> bool:
        room = self.rooms.pop(table_id, None)
        if room is None:
            return False
        logger.info(f"Removed {table_id}")
        return True

    async def disconnect(self, table_id: str, player_id: str):
        """Disconnect a client from a table."""
        room = self.get_room(table_id)
        if room and player_id in room.connections:
            del room.connections[player_id]
            logger.info(f"Player {player_id} disconnected from {table_id}")
            await room.broadcast({"type": "player_left", "player_id": player_id})

    async def handle_message(
        self,
        table_id: str,
        player_id: str,
        message: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Handle a message from a client.

        Returns:
            Response dict for the sender
        """
        room = self.get_room(table_id)
        if room is None:
            return {"type": "error", "message": "Table not found"}

        msg_type = message.get("type", "")

        async with room.lock:
            try:
                if msg_type == "action":
                    return await self._handle_action(room, player_id, message)
                elif msg_type == "start_hand":
                    return await self._handle_start_hand(room)
                elif msg_type == "get_state":
                    return {"type": "state", **table_state(room.table, player_id)}
                elif msg_type == "get_recommendation":
                    return self._handle_get_recommendation(room)
                else:
                    return {"type": "error", "message": f"Unknown message type: {msg_type}"}
            except (IllegalActionError, HandStateError) as e:
                return {"type": "error", "message": str(e)}

    async def _handle_action(
        self,
        room: TableRoom,
        player_id: str,
        message: Dict[str, Any],
    ) -> Dict[str, Any]:
        """Apply a human action, then let the autonomous seats play."""
        table = room.table
        action = str(message.get("action", ""))
        amount = message.get("amount")

        table.take_action(action, amount, player_id=player_id)
        table.play_autonomous()

        await room.send_state_to_all()
        if not table.is_hand_running():
            await room.send_result()

        return {"type": "action_result", "success": True, "action": action.lower()}

    async def _handle_start_hand(self, room: TableRoom) -> Dict[str, Any]:
        table = room.table
        table.start_hand()
        table.play_autonomous()

        await room.send_state_to_all()
        if not table.is_hand_running():
            await room.send_result()

        return {"type": "hand_started", "hand_number": table.hand_number}

    def _handle_get_recommendation(self, room: TableRoom) -> Dict[str, Any]:
        advice = room.table.recommendation()
        return {
            "type": "recommendation",
            "recommendation": advice.to_dict() if advice is not None else None,
        }


# Global table manager instance
table_manager = TableManager()


async def websocket_endpoint(websocket: WebSocket):
    """
    WebSocket endpoint for table communication.

    Protocol:
    1. Client connects and sends: {"type": "join", "table_id": "...", "player_id": "..."}
       An unknown table_id seats a fresh default table.
    2. Server sends the table state
    3. Client sends {"type": "start_hand"}, {"type": "action", "action": "call"},
       {"type": "get_state"} or {"type": "get_recommendation"}
    4. Server broadcasts state updates after every transition
    """
    table_id: Optional[str] = None
    player_id: Optional[str] = None

    try:
        await websocket.accept()
        join_msg = await websocket.receive_json()

        if join_msg.get("type") != "join":
            await websocket.send_json({
                "type": "error",
                "message": "First message must be join"
            })
            await websocket.close()
            return

        table_id = join_msg.get("table_id")
        player_id = join_msg.get("player_id")

        if not player_id:
            await websocket.send_json({
                "type": "error",
                "message": "player_id required"
            })
            await websocket.close()
            return

        room = table_manager.get_room(table_id) if table_id else None
        if room is None:
            table_id, room = table_manager.create_table()

        room.connections[player_id] = websocket
        logger.info(f"Player {player_id} joined {table_id}")

        await websocket.send_json({
            "type": "state",
            **table_state(room.table, player_id)
        })
        await room.broadcast(
            {"type": "player_joined", "player_id": player_id},
            exclude=player_id
        )

        while True:
            message = await websocket.receive_json()
            response = await table_manager.handle_message(table_id, player_id, message)
            await websocket.send_json(response)

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected: {player_id}")
    finally:
        if table_id and player_id:
            await table_manager.disconnect(table_id, player_id)
