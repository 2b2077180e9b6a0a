from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from cueroom.modules.realtime.services.connection_manager import manager

router = APIRouter()

@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """Real-time comment and typing events; no auth, no persistence"""
    await manager.connect(websocket)
    try:
        while True:
            raw = await websocket.receive_text()
            await manager.handle_message(websocket, raw)
    except WebSocketDisconnect:
        pass
    finally:
        manager.disconnect(websocket)
