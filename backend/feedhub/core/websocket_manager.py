# FILE: backend/feedhub/core/websocket_manager.py

import asyncio
import logging
import uuid
from typing import Awaitable, Callable, Dict, Optional

from fastapi import WebSocket

from .config import settings
from ..services.weather_service import weather_service

logger = logging.getLogger(__name__)

WEATHER_EVENT = "FromAPI"

FetchValue = Callable[[], Awaitable[Optional[float]]]

class ConnectionManager:
    """
    Tracks live WebSocket connections by connection id.
    Each connection owns one poll task that pushes the latest weather value
    to that socket only; the task is cancelled when the connection goes away.
    """
    def __init__(self, fetch: FetchValue, interval: float):
        self.fetch = fetch
        self.interval = interval
        self.active_connections: Dict[str, WebSocket] = {}
        self.poll_tasks: Dict[str, asyncio.Task] = {}
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket) -> str:
        """Accepts the socket, registers it and arms its poll task."""
        await websocket.accept()
        connection_id = uuid.uuid4().hex
        async with self._lock:
            self.active_connections[connection_id] = websocket
            self.poll_tasks[connection_id] = asyncio.create_task(
                self._poll(connection_id, websocket),
                name=f"weather-poll-{connection_id}",
            )
        logger.info(f"client connected {connection_id}")
        return connection_id

    async def disconnect(self, connection_id: str):
        """Cancels the connection's poll task and forgets the socket."""
        async with self._lock:
            task = self.poll_tasks.pop(connection_id, None)
            self.active_connections.pop(connection_id, None)
        if task is not None:
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
        logger.info(f"Socket {connection_id} disconnected.")

    async def _poll(self, connection_id: str, websocket: WebSocket):
        while True:
            await asyncio.sleep(self.interval)
            value = await self.fetch()
            if value is None:
                continue
            try:
                await websocket.send_json({"event": WEATHER_EVENT, "data": value})
            except Exception as e:
                logger.warning(f"Stopping weather feed for {connection_id}: send failed ({e})")
                return

    def task_count(self) -> int:
        return sum(1 for task in self.poll_tasks.values() if not task.done())

    async def shutdown(self):
        for connection_id in list(self.poll_tasks):
            await self.disconnect(connection_id)

# Create a single, globally accessible instance of the manager
manager = ConnectionManager(
    fetch=weather_service.fetch_current_temperature,
    interval=settings.WEATHER_POLL_SECONDS,
)
