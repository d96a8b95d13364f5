# =============================================================================
# app/websocket/routes.py - WebSocket Routes
# =============================================================================
# Chat broadcast and server events.
#
# Connect:
#   ws://host/ws/chat                 anonymous, name chosen with a JOIN frame
#   ws://host/ws/chat?token={jwt}     signed in, name is the token's username
#   ws://host/ws/system               scheduled job events (read-only)
#
# Chat frames (client -> server):
#   {"type": "JOIN", "sender": "alice"}
#   {"type": "CHAT", "content": "hello"}
#   "ping" (plain text) -> "pong"
#
# Broadcast to every subscriber of topic "public":
#   {"type": "JOIN" | "CHAT" | "LEAVE", "sender": ..., "content": ..., "timestamp": ...}
# =============================================================================

import logging

from fastapi import APIRouter, HTTPException, Query, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from app.auth import AuthUser, authenticate_token
from app.websocket.manager import CHAT_TOPIC, SYSTEM_TOPIC, websocket_manager
from core.database import session_scope
from core.models.chat import ChatMessage, IncomingChatMessage, MessageType

logger = logging.getLogger(__name__)

router = APIRouter()


async def _send_error(websocket: WebSocket, content: str) -> None:
    frame = ChatMessage(type=MessageType.ERROR, content=content)
    await websocket.send_json(frame.model_dump(mode="json"))


async def _broadcast(message: ChatMessage) -> int:
    return await websocket_manager.broadcast(CHAT_TOPIC, message.model_dump(mode="json"))


async def _receive_frame(websocket: WebSocket) -> str | None:
    """
    Wait for the next client frame.

    Returns:
        The text of a text frame, or None for a binary frame

    Raises:
        WebSocketDisconnect: When the client closes the connection
    """
    message = await websocket.receive()
    if message["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(message.get("code", 1000), message.get("reason"))
    return message.get("text")


def _authenticate(token: str) -> AuthUser:
    with session_scope() as session:
        return authenticate_token(token, session)


@router.websocket("/ws/chat")
async def chat_websocket(
    websocket: WebSocket,
    token: str | None = Query(default=None, description="Optional JWT; fixes the sender name"),
):
    """
    WebSocket endpoint for the public chat room.

    Anonymous clients must send a JOIN frame with a sender name before
    chatting; a connection joins once. Clients connecting with a valid
    token are joined under their username straight away.
    """
    # 1. Resolve the user when a token is supplied
    username: str | None = None
    authenticated = False

    if token:
        try:
            user = await run_in_threadpool(_authenticate, token)
        except HTTPException as e:
            logger.warning(f"Chat WebSocket auth failed: {e.detail}")
            await websocket.close(code=4001, reason="Invalid token")
            return
        username = user.username
        authenticated = True

    # 2. Accept connection and subscribe to the chat topic
    await websocket_manager.connect(CHAT_TOPIC, websocket)

    try:
        if authenticated:
            await _broadcast(ChatMessage(type=MessageType.JOIN, sender=username))

        while True:
            data = await _receive_frame(websocket)

            if data is None:
                await _send_error(websocket, "Malformed message")
                continue

            # Handle ping/pong for keepalive
            if data == "ping":
                await websocket.send_text("pong")
                continue

            try:
                incoming = IncomingChatMessage.model_validate_json(data)
            except ValidationError:
                await _send_error(websocket, "Malformed message")
                continue

            if incoming.type == MessageType.JOIN:
                if authenticated:
                    continue
                if username is not None:
                    await _send_error(websocket, f"Already joined as {username}")
                    continue
                if not incoming.sender:
                    await _send_error(websocket, "JOIN requires a sender")
                    continue
                username = incoming.sender
                await _broadcast(ChatMessage(type=MessageType.JOIN, sender=username))

            elif incoming.type == MessageType.CHAT:
                if username is None:
                    await _send_error(websocket, "Send a JOIN message before chatting")
                    continue
                if not incoming.content:
                    await _send_error(websocket, "CHAT requires content")
                    continue
                await _broadcast(ChatMessage(
                    type=MessageType.CHAT,
                    sender=username,
                    content=incoming.content,
                ))

            else:
                await _send_error(websocket, f"Unsupported message type: {incoming.type.value}")

    except WebSocketDisconnect:
        logger.info(f"Chat client disconnected: {username or 'anonymous'}")
    finally:
        websocket_manager.disconnect(CHAT_TOPIC, websocket)
        if username:
            await _broadcast(ChatMessage(type=MessageType.LEAVE, sender=username))


@router.websocket("/ws/system")
async def system_websocket(websocket: WebSocket):
    """
    WebSocket endpoint for server events published by background jobs.

    Events received:
        - server_time: {"type": "server_time", "timestamp": "..."}
    """
    await websocket_manager.connect(SYSTEM_TOPIC, websocket)

    try:
        await websocket.send_json({
            "type": "connected",
            "topic": SYSTEM_TOPIC,
            "message": "Connected to server events",
        })

        while True:
            data = await _receive_frame(websocket)
            if data == "ping":
                await websocket.send_text("pong")
            elif data is not None:
                logger.debug(f"WebSocket received: {data[:100]}")

    except WebSocketDisconnect:
        logger.info("System WebSocket client disconnected")
    finally:
        websocket_manager.disconnect(SYSTEM_TOPIC, websocket)


@router.get("/ws/status")
async def websocket_status():
    """
    Get WebSocket connection statistics.

    Returns:
        dict: Connection counts per topic
    """
    topics = websocket_manager.get_active_topics()
    return {
        "total_connections": websocket_manager.get_connection_count(),
        "topics": {topic: websocket_manager.get_connection_count(topic) for topic in topics},
    }
