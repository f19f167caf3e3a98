"""WebSocket endpoint pushing match events to connected renderers."""

from __future__ import annotations

import asyncio
from typing import Any

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from loguru import logger

from models.events import FrameEvent

router = APIRouter()

# Connected renderer sockets
connections: list[WebSocket] = []


async def broadcast(message: dict[str, Any]) -> None:
    """Send a message to all connected WebSocket clients.

    Args:
        message: The JSON-serializable message to send.
    """
    disconnected = []
    for i, ws in enumerate(connections):
        try:
            await ws.send_json(message)
        except Exception:
            disconnected.append(i)
    # Clean up disconnected clients
    for i in reversed(disconnected):
        connections.pop(i)


async def notify_events(events: list[FrameEvent]) -> None:
    """Notify all clients of a batch of match events."""
    await broadcast({
        "type": "events",
        "events": [event.model_dump(mode="json") for event in events],
    })


def event_listener(events: list[FrameEvent]) -> None:
    """Match listener that forwards events without blocking the frame."""
    if not connections:
        return
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        logger.debug("No running event loop, dropping {} events", len(events))
        return
    loop.create_task(notify_events(events))


@router.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket) -> None:
    """Stream every event of the current match to the client."""
    await websocket.accept()
    connections.append(websocket)

    try:
        await websocket.send_json({"type": "connected"})

        # Keep connection alive, listen for client messages (optional)
        while True:
            try:
                await websocket.receive_text()
            except WebSocketDisconnect:
                break
    finally:
        if websocket in connections:
            connections.remove(websocket)
