"""
HTTP API Routes for pokeradvisor.

Tables are created and played over HTTP; every route that changes a table
also lets the autonomous seats act, so a response always leaves the table
either waiting on a human or between hands. Real-time updates are pushed
over the WebSocket.
"""

from typing import Dict, Any, Optional
from fastapi import APIRouter, HTTPException

from pokeradvisor.core.exceptions import IllegalActionError, HandStateError
from pokeradvisor.server.schemas import (
    CreateTableRequest, ActionRequest, TableCreatedSchema,
    LegalActionsSchema, RecommendationSchema, HandSummarySchema,
)
from pokeradvisor.server.websocket import TableRoom, table_manager, table_state


router = APIRouter()


def get_room(table_id: str) -> TableRoom:
    room = table_manager.get_room(table_id)
    if room is None:
        raise HTTPException(status_code=404, detail=f"Table {table_id} not found")
    return room


def _viewer(room: TableRoom) -> Optional[str]:
    humans = room.table.human_player_ids
    return humans[0] if humans else None


@router.post("/tables", response_model=TableCreatedSchema)
async def create_table(req: CreateTableRequest) -> Dict[str, Any]:
    """Seat one human and the requested number of autonomous players."""
    try:
        table_id, room = table_manager.create_table(**req.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    table = room.table
    return {
        "table_id": table_id,
        "player_ids": [p.player_id for p in table.players],
        "human_player_id": _viewer(room),
        "small_blind": table.blinds.small_blind,
        "big_blind": table.blinds.big_blind,
        "buy_in": req.buy_in,
    }


@router.post("/tables/{table_id}/hands")
async def start_hand(table_id: str) -> Dict[str, Any]:
    """
    Deal the next hand.

    Autonomous seats act until the human is to act or the hand is over.
    """
    room = get_room(table_id)
    async with room.lock:
        try:
            room.table.start_hand()
        except HandStateError as e:
            raise HTTPException(status_code=409, detail=str(e))
        room.table.play_autonomous()
        state = table_state(room.table, _viewer(room))

    await room.send_state_to_all()
    return state


@router.get("/tables/{table_id}")
async def get_table_state(table_id: str, viewer_id: Optional[str] = None) -> Dict[str, Any]:
    """Current table state as the viewer (the human seat by default) sees it."""
    room = get_room(table_id)
    return table_state(room.table, viewer_id or _viewer(room))


@router.get("/tables/{table_id}/legal_actions", response_model=LegalActionsSchema)
async def get_legal_actions(table_id: str) -> Dict[str, Any]:
    """Legal actions for the player to act."""
    room = get_room(table_id)
    actor = room.table.current_player
    return {
        "player_id": actor.player_id if actor else None,
        "actions": [a.to_dict() for a in room.table.legal_actions()],
    }


@router.post("/tables/{table_id}/actions")
async def take_action(table_id: str, req: ActionRequest) -> Dict[str, Any]:
    """
    Take a game action.

    Illegal actions are refused with 400 and leave the table unchanged.
    """
    room = get_room(table_id)
    async with room.lock:
        table = room.table
        try:
            table.take_action(req.action_type, req.amount, player_id=req.player_id)
        except IllegalActionError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except HandStateError as e:
            raise HTTPException(status_code=409, detail=str(e))
        table.play_autonomous()
        state = table_state(table, _viewer(room))

    await room.send_state_to_all()
    if not room.table.is_hand_running():
        await room.send_result()
    return state


@router.get("/tables/{table_id}/recommendation", response_model=RecommendationSchema)
async def get_recommendation(table_id: str) -> Dict[str, Any]:
    """Advice for the player to act."""
    room = get_room(table_id)
    advice = room.table.recommendation()
    if advice is None:
        raise HTTPException(status_code=409, detail="No hand in progress")
    return advice.to_dict()


@router.get("/tables/{table_id}/analysis")
async def get_analysis(table_id: str) -> Dict[str, Any]:
    """Payoff matrix and regret-matched strategy for the player to act."""
    room = get_room(table_id)
    analysis = room.table.analysis()
    if analysis is None:
        raise HTTPException(status_code=409, detail="No hand in progress")
    return analysis


@router.get("/tables/{table_id}/summary", response_model=HandSummarySchema)
async def get_summary(table_id: str) -> Dict[str, Any]:
    """Record of the most recently completed hand."""
    room = get_room(table_id)
    summary = room.table.summary()
    if summary is None:
        raise HTTPException(status_code=409, detail="No completed hand yet")
    return summary.to_dict()


@router.delete("/tables/{table_id}")
async def delete_table(table_id: str) -> Dict[str, Any]:
    """Close a table."""
    if not table_manager.remove_table(table_id):
        raise HTTPException(status_code=404, detail=f"Table {table_id} not found")
    return {"success": True, "message": f"Table {table_id} removed"}
