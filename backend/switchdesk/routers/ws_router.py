"""Persistent channel endpoint"""

import logging

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from switchdesk.core.dependencies import get_ws_app_state
from switchdesk.core.state import AppState
from switchdesk.realtime.dispatcher import MessageDispatcher
from switchdesk.realtime.hub import WebSocketChannel

logger = logging.getLogger(__name__)

router = APIRouter(tags=["channel"])


@router.websocket("/ws")
async def channel(websocket: WebSocket, state: AppState = Depends(get_ws_app_state)) -> None:
    await websocket.accept()
    dispatcher = MessageDispatcher(state)
    connection = WebSocketChannel(websocket)
    client = await state.hub.connect(connection, greeting=dispatcher.welcome)
    try:
        # The server may close the channel itself (restart, sweep, shutdown)
        while connection.is_open:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000), message.get("reason"))
            # Text and binary frames carry the same JSON messages
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes") or b""
            await dispatcher.handle(client, raw)
    except WebSocketDisconnect as e:
        logger.debug(f"Channel {client.client_id} closed by peer (code={e.code})")
    finally:
        await state.hub.disconnect(client.client_id)
