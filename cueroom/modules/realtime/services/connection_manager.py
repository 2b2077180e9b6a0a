import json
import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from cueroom.core.config import settings

logger = logging.getLogger("cueroom")


@dataclass(eq=False)
class Connection:
    websocket: WebSocket
    room: Optional[str] = None


class ConnectionManager:
    """
    In-process fan-out hub for the /ws endpoint.

    Keeps every open socket with the room it last joined. Comment and typing
    events from one socket are relayed to every other open socket; nothing is
    persisted, acknowledged or replayed. With room scoping enabled, delivery is
    limited to sockets that joined the sender's room.
    """

    def __init__(self, room_scoped: bool = False):
        self.room_scoped = room_scoped
        self.active_connections: List[Connection] = []

    def _find(self, websocket: WebSocket) -> Optional[Connection]:
        for connection in self.active_connections:
            if connection.websocket is websocket:
                return connection
        return None

    def _remove(self, websocket: WebSocket) -> None:
        self.active_connections = [c for c in self.active_connections if c.websocket is not websocket]

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        self.active_connections.append(Connection(websocket))
        logger.info(f"New WebSocket connection ({len(self.active_connections)} open)")

    def disconnect(self, websocket: WebSocket) -> None:
        self._remove(websocket)
        logger.info(f"WebSocket connection closed ({len(self.active_connections)} open)")

    def join_room(self, websocket: WebSocket, room: Any) -> None:
        connection = self._find(websocket)
        if connection:
            connection.room = None if room is None else str(room)
            logger.debug(f"Socket joined room {room}")

    def _recipients(self, sender: WebSocket) -> List[WebSocket]:
        sender_connection = self._find(sender)
        sender_room = sender_connection.room if sender_connection else None
        recipients = []
        # Iterate a snapshot; failed sends remove entries while we broadcast
        for connection in list(self.active_connections):
            if connection.websocket is sender:
                continue
            state = getattr(connection.websocket, "client_state", WebSocketState.CONNECTED)
            if state != WebSocketState.CONNECTED:
                continue
            if self.room_scoped and connection.room != sender_room:
                continue
            recipients.append(connection.websocket)
        return recipients

    async def broadcast(self, message: dict, sender: WebSocket) -> int:
        """Send a message to every other open socket. Returns how many sends succeeded."""
        delivered = 0
        for websocket in self._recipients(sender):
            try:
                await websocket.send_json(message)
                delivered += 1
            except Exception as e:
                # Best effort: a socket that can't take the message is dropped
                logger.debug(f"Dropping WebSocket after failed send: {e}")
                self._remove(websocket)
        return delivered

    async def handle_message(self, websocket: WebSocket, raw: str) -> None:
        try:
            data = json.loads(raw)
        except ValueError as e:
            logger.error(f"WebSocket message error: {e}")
            return
        if not isinstance(data, dict):
            logger.error("WebSocket message error: expected a JSON object")
            return

        message_type = data.get("type")
        if message_type == "join_room":
            self.join_room(websocket, data.get("room"))
        elif message_type == "new_comment":
            await self.broadcast({"type": "comment_added", "data": data.get("comment")}, websocket)
        elif message_type == "typing":
            await self.broadcast({"type": "user_typing", "user": data.get("user")}, websocket)
        else:
            logger.debug(f"Ignoring WebSocket message of type {message_type!r}")


# Create a global instance of the connection manager
manager = ConnectionManager(room_scoped=settings.WS_ROOM_SCOPED)
