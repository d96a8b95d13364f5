# =============================================================================
# app/websocket/manager.py - WebSocket Connection Manager
# =============================================================================
# Manages WebSocket connections per topic and handles broadcasting.
#
# Usage:
#   from app.websocket import websocket_manager
#
#   # Subscribe a client
#   await websocket_manager.connect("public", websocket)
#
#   # Broadcast to all clients subscribed to a topic
#   await websocket_manager.broadcast("public", {"type": "CHAT", ...})
#
#   # Unsubscribe a client
#   websocket_manager.disconnect("public", websocket)
# =============================================================================

import logging
from typing import Dict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)

# Topic for user chat messages
CHAT_TOPIC = "public"

# Topic for server-side events (scheduled jobs)
SYSTEM_TOPIC = "system"


class ConnectionManager:
    """
    Manages WebSocket connections organized by topic.

    Each topic can have many subscribers. A message broadcast to a topic
    is sent to every subscriber; clients that fail to receive it are dropped.
    """

    def __init__(self):
        # topic -> set of WebSocket connections
        self.connections: Dict[str, Set[WebSocket]] = {}
        self._total_connections = 0

    async def connect(self, topic: str, websocket: WebSocket, accept: bool = True) -> None:
        """
        Accept a WebSocket connection and subscribe it to a topic.

        Args:
            topic: The topic to subscribe to
            websocket: The WebSocket connection
            accept: Whether to complete the handshake (False if already accepted)
        """
        if accept:
            await websocket.accept()

        self.connections.setdefault(topic, set()).add(websocket)
        self._total_connections += 1

        logger.info(
            f"WebSocket subscribed to topic {topic}. "
            f"Total connections: {self._total_connections}"
        )

    def disconnect(self, topic: str, websocket: WebSocket) -> None:
        """
        Remove a WebSocket connection from a topic.
        """
        subscribers = self.connections.get(topic)
        if subscribers is not None and websocket in subscribers:
            subscribers.discard(websocket)
            self._total_connections -= 1

            # Clean up empty topic entries
            if not subscribers:
                del self.connections[topic]

        logger.info(
            f"WebSocket unsubscribed from topic {topic}. "
            f"Total connections: {self._total_connections}"
        )

    async def broadcast(self, topic: str, message: dict) -> int:
        """
        Broadcast a message to all subscribers of a topic.

        Args:
            topic: The topic to broadcast to
            message: The message dict to send (will be JSON encoded)

        Returns:
            int: Number of clients the message was sent to
        """
        if topic not in self.connections:
            logger.debug(f"No subscribers for topic {topic}, skipping broadcast")
            return 0

        dead_connections: Set[WebSocket] = set()
        sent_count = 0

        for websocket in list(self.connections[topic]):
            try:
                await websocket.send_json(message)
                sent_count += 1
            except Exception as e:
                logger.warning(f"Failed to send to WebSocket: {e}")
                dead_connections.add(websocket)

        # Clean up any dead connections
        for ws in dead_connections:
            self.disconnect(topic, ws)

        if dead_connections:
            logger.info(f"Cleaned up {len(dead_connections)} dead connections")

        logger.debug(
            f"Broadcast to topic {topic}: "
            f"type={message.get('type')}, sent to {sent_count} clients"
        )

        return sent_count

    def get_connection_count(self, topic: str | None = None) -> int:
        """
        Get the number of active connections, for one topic or in total.
        """
        if topic:
            return len(self.connections.get(topic, set()))
        return self._total_connections

    def get_active_topics(self) -> list[str]:
        """Topics with at least one subscriber."""
        return list(self.connections.keys())


# Global singleton instance
websocket_manager = ConnectionManager()
