import asyncio
import json

from fastapi.testclient import TestClient
from starlette.websockets import WebSocketState

from cueroom.main import app
from cueroom.modules.realtime.services.connection_manager import ConnectionManager


class FakeSocket:
    def __init__(self, fail=False):
        self.sent = []
        self.accepted = False
        self.fail = fail
        self.client_state = WebSocketState.CONNECTED

    async def accept(self):
        self.accepted = True

    async def send_json(self, message):
        if self.fail:
            raise RuntimeError("socket closed")
        self.sent.append(message)


def _connected(manager, count):
    sockets = [FakeSocket() for _ in range(count)]
    for socket in sockets:
        asyncio.run(manager.connect(socket))
    return sockets


def test_new_comment_is_relayed_to_other_sockets_only():
    manager = ConnectionManager()
    a, b, c = _connected(manager, 3)
    comment = {"id": 7, "content": "absolute weapon"}

    asyncio.run(manager.handle_message(a, json.dumps({"type": "new_comment", "comment": comment})))

    assert a.sent == []
    assert b.sent == [{"type": "comment_added", "data": comment}]
    assert c.sent == [{"type": "comment_added", "data": comment}]


def test_typing_is_relayed():
    manager = ConnectionManager()
    a, b = _connected(manager, 2)

    asyncio.run(manager.handle_message(b, json.dumps({"type": "typing", "user": "acid_annie"})))

    assert a.sent == [{"type": "user_typing", "user": "acid_annie"}]
    assert b.sent == []


def test_bad_messages_are_ignored():
    manager = ConnectionManager()
    a, b = _connected(manager, 2)

    asyncio.run(manager.handle_message(a, "{not json"))
    asyncio.run(manager.handle_message(a, json.dumps(["new_comment"])))
    asyncio.run(manager.handle_message(a, json.dumps({"type": "mystery"})))

    assert b.sent == []
    assert len(manager.active_connections) == 2


def test_closed_and_failing_sockets_are_skipped():
    manager = ConnectionManager()
    a, closed, broken, ok = _connected(manager, 4)
    closed.client_state = WebSocketState.DISCONNECTED
    broken.fail = True

    delivered = asyncio.run(manager.broadcast({"type": "user_typing", "user": "x"}, a))

    assert delivered == 1
    assert closed.sent == []
    assert ok.sent == [{"type": "user_typing", "user": "x"}]
    assert broken not in [conn.websocket for conn in manager.active_connections]


def test_disconnect_removes_socket():
    manager = ConnectionManager()
    a, b = _connected(manager, 2)

    manager.disconnect(b)
    asyncio.run(manager.handle_message(a, json.dumps({"type": "typing", "user": "x"})))

    assert b.sent == []
    assert len(manager.active_connections) == 1


def test_global_broadcast_ignores_rooms_by_default():
    manager = ConnectionManager()
    a, b = _connected(manager, 2)
    asyncio.run(manager.handle_message(a, json.dumps({"type": "join_room", "room": "post_1"})))
    asyncio.run(manager.handle_message(b, json.dumps({"type": "join_room", "room": "post_2"})))

    asyncio.run(manager.handle_message(a, json.dumps({"type": "new_comment", "comment": {"id": 1}})))

    assert b.sent == [{"type": "comment_added", "data": {"id": 1}}]


def test_room_scoped_broadcast():
    manager = ConnectionManager(room_scoped=True)
    a, same_room, other_room = _connected(manager, 3)
    asyncio.run(manager.handle_message(a, json.dumps({"type": "join_room", "room": 1})))
    asyncio.run(manager.handle_message(same_room, json.dumps({"type": "join_room", "room": "1"})))
    asyncio.run(manager.handle_message(other_room, json.dumps({"type": "join_room", "room": 2})))

    asyncio.run(manager.handle_message(a, json.dumps({"type": "new_comment", "comment": {"id": 1}})))

    assert same_room.sent == [{"type": "comment_added", "data": {"id": 1}}]
    assert other_room.sent == []


def test_websocket_endpoint_fans_out():
    # Entering the client shares one event loop between all sockets
    with TestClient(app) as client:
        with client.websocket_connect("/ws") as a, client.websocket_connect("/ws") as b, \
                client.websocket_connect("/ws") as c:
            comment = {"id": 3, "content": "rinse it"}
            a.send_json({"type": "new_comment", "comment": comment})
            assert b.receive_json() == {"type": "comment_added", "data": comment}
            assert c.receive_json() == {"type": "comment_added", "data": comment}

            a.send_text("garbage")
            b.send_json({"type": "typing", "user": "techno_tom"})
            # The sender's own comment never came back, so typing is the first thing A sees
            assert a.receive_json() == {"type": "user_typing", "user": "techno_tom"}
            assert c.receive_json() == {"type": "user_typing", "user": "techno_tom"}
