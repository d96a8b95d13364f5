# =============================================================================
# core/models/chat.py - Chat Message Schemas
# =============================================================================
# Frames exchanged over /ws/chat.
#
# Client -> server:
#   {"type": "JOIN", "sender": "alice"}
#   {"type": "CHAT", "content": "hello"}
#
# Server -> subscribers:
#   {"type": "CHAT", "sender": "alice", "content": "hello", "timestamp": "..."}
# =============================================================================

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field


class MessageType(str, Enum):
    """Kinds of chat frames."""
    CHAT = "CHAT"
    JOIN = "JOIN"
    LEAVE = "LEAVE"
    ERROR = "ERROR"


class IncomingChatMessage(BaseModel):
    """A frame sent by a chat client."""

    type: MessageType
    sender: str | None = Field(default=None, min_length=1, max_length=50)
    content: str | None = Field(default=None, max_length=2000)


class ChatMessage(BaseModel):
    """A frame broadcast to every subscriber of a topic."""

    type: MessageType
    sender: str | None = None
    content: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
