# =============================================================================
# app/websocket/__init__.py - WebSocket Module
# =============================================================================
# Provides chat broadcast and server events over WebSockets.
#
# Usage:
#   # Broadcast to a topic (from FastAPI)
#   from app.websocket import websocket_manager
#
#   await websocket_manager.broadcast("public", {"type": "CHAT", ...})
#
#   # Publish events from Celery workers
#   from app.websocket.broadcast import publish_server_time
#
#   publish_server_time(datetime.now(timezone.utc).isoformat())
# =============================================================================

from app.websocket.manager import CHAT_TOPIC, SYSTEM_TOPIC, websocket_manager
from app.websocket.broadcast import (
    publish_event,
    publish_server_time,
    WEBSOCKET_CHANNEL,
)

__all__ = [
    "websocket_manager",
    "CHAT_TOPIC",
    "SYSTEM_TOPIC",
    "publish_event",
    "publish_server_time",
    "WEBSOCKET_CHANNEL",
]
