"""WebSocket endpoint pushing queue change events."""

from cadence.core.auth import websocket_user_id
from cadence.core.errors import CadenceError
from cadence.websocket.manager import manager, queue_room
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

router = APIRouter(tags=["events"])


@router.websocket("/ws/queue")
async def queue_events(websocket: WebSocket):
    """Stream the caller's queue events; answers ``ping`` with ``pong``."""
    try:
        user_id = websocket_user_id(websocket)
    except CadenceError:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    room = queue_room(user_id)
    await manager.connect(websocket, room)
    try:
        while True:
            message = await websocket.receive_text()
            if message == "ping":
                await manager.send_json({"type": "pong"}, websocket)
    except WebSocketDisconnect:
        manager.disconnect(websocket, room)
