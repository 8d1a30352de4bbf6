# FILE: backend/feedhub/api/endpoints/websockets.py

import logging

from fastapi import APIRouter, WebSocket

from ...core.websocket_manager import manager

logger = logging.getLogger(__name__)
router = APIRouter()

@router.websocket("/ws")
async def weather_feed_endpoint(websocket: WebSocket):
    connection_id = await manager.connect(websocket)
    try:
        # Client messages carry no meaning; keep reading until the peer goes away.
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    except Exception as e:
        logger.error(f"An unexpected error occurred in WebSocket {connection_id}: {e}", exc_info=True)
    finally:
        await manager.disconnect(connection_id)
