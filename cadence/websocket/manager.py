"""WebSocket connection manager for queue change notifications."""

from eliot import log_message
from fastapi import WebSocket


class ConnectionManager:
    """Manages WebSocket connections grouped into rooms."""

    def __init__(self):
        self.room_connections: dict[str, set[WebSocket]] = {}

    async def connect(self, websocket: WebSocket, room: str):
        """Accept and register a WebSocket connection."""
        await websocket.accept()
        self.room_connections.setdefault(room, set()).add(websocket)

    def disconnect(self, websocket: WebSocket, room: str):
        """Remove a WebSocket connection."""
        if room in self.room_connections:
            self.room_connections[room].discard(websocket)
            if not self.room_connections[room]:
                del self.room_connections[room]

    def connection_count(self, room: str) -> int:
        return len(self.room_connections.get(room, ()))

    async def send_json(self, data: dict, websocket: WebSocket):
        """Send JSON data to a specific WebSocket."""
        await websocket.send_json(data)

    async def broadcast_json_to_room(self, room: str, data: dict) -> int:
        """Broadcast JSON data to all clients in a room.

        Connections that fail to receive are dropped from the room.
        Returns the number of clients reached.
        """
        delivered = 0
        for connection in list(self.room_connections.get(room, ())):
            try:
                await connection.send_json(data)
            except Exception as exc:
                log_message(message_type="websocket_send_failed", room=room, error=str(exc))
                self.disconnect(connection, room)
            else:
                delivered += 1
        return delivered


# Global connection manager instance
manager = ConnectionManager()


class EventTypes:
    """WebSocket event types."""

    QUEUE_UPDATED = "queue_updated"
    QUEUE_CLEARED = "queue_cleared"
    TRACK_REMOVED = "track_removed"


def queue_room(user_id: str) -> str:
    return f"queue:{user_id}"


async def broadcast_queue_event(event_type: str, user_id: str, data: dict) -> int:
    """Broadcast a queue event to the user's open connections."""
    return await manager.broadcast_json_to_room(queue_room(user_id), {"type": event_type, "userId": user_id, "data": data})
