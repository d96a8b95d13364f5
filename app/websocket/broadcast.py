# =============================================================================
# app/websocket/broadcast.py - Cross-Process Broadcasting
# =============================================================================
# Lets Celery workers publish events that get broadcast to WebSocket clients.
#
# Uses Redis pub/sub for cross-process communication:
# - Workers call publish_event() to send events
# - The API process subscribes (see app.main) and broadcasts to the topic
#
# Events:
#   - server_time: Published by the report_current_time scheduled job
# =============================================================================

import json
import logging
from typing import Any

logger = logging.getLogger(__name__)

# Redis channel for WebSocket events
WEBSOCKET_CHANNEL = "demo_project:websocket:events"


def get_redis_client():
    """Get a Redis client for pub/sub operations."""
    import redis
    from app.config import settings
    return redis.from_url(settings.REDIS_URL)


def publish_event(topic: str, event_type: str, data: dict[str, Any]) -> bool:
    """
    Publish an event that will be broadcast to WebSocket subscribers.

    Args:
        topic: The WebSocket topic to broadcast to
        event_type: Event type (e.g., server_time)
        data: Event data to include

    Returns:
        bool: True if published successfully
    """
    try:
        client = get_redis_client()

        message = json.dumps({
            "topic": topic,
            "type": event_type,
            **data
        }, default=str)

        client.publish(WEBSOCKET_CHANNEL, message)

        logger.debug(f"Published {event_type} event for topic {topic}")
        return True

    except Exception as e:
        logger.error(f"Failed to publish event: {e}")
        return False


def publish_server_time(timestamp: str) -> bool:
    """
    Publish a server_time event to the system topic.
    """
    from app.websocket.manager import SYSTEM_TOPIC

    return publish_event(
        topic=SYSTEM_TOPIC,
        event_type="server_time",
        data={"timestamp": timestamp},
    )
