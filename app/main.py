# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Demo Project API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload --port 8080
# =============================================================================

import asyncio
import json
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import IntegrityError

from app.config import settings
from app.websocket import websocket_manager, WEBSOCKET_CHANNEL
from app.exceptions import (
    DemoProjectException,
    demo_project_exception_handler,
    general_exception_handler,
    integrity_error_handler,
    validation_exception_handler,
)
from app.routers import hello, products, todos, books, tasks, health
from app.routers.health import request_metrics
from app.auth import routes as auth_routes
from app.websocket import routes as websocket_routes
from core.database import init_db

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Global flag for Redis listener task
_redis_listener_task = None
_shutdown_event = None


async def redis_pubsub_listener():
    """
    Background task that listens to Redis pub/sub and broadcasts to WebSockets.

    This bridges Celery workers with WebSocket clients by:
    1. Subscribing to the Redis channel where workers publish events
    2. Broadcasting received events to subscribers of the event's topic
    """
    import redis.asyncio as aioredis

    logger.info("Starting Redis pub/sub listener for WebSocket broadcasts")

    redis_client = None
    pubsub = None

    try:
        redis_client = aioredis.from_url(settings.REDIS_URL)
        pubsub = redis_client.pubsub()
        await pubsub.subscribe(WEBSOCKET_CHANNEL)

        async for message in pubsub.listen():
            if _shutdown_event and _shutdown_event.is_set():
                break

            if message["type"] == "message":
                try:
                    data = json.loads(message["data"])
                    topic = data.pop("topic", None)

                    if topic:
                        await websocket_manager.broadcast(topic, data)
                        logger.debug(f"Broadcast {data.get('type')} to topic {topic}")

                except json.JSONDecodeError as e:
                    logger.warning(f"Invalid JSON in Redis message: {e}")
                except Exception as e:
                    logger.error(f"Error processing Redis message: {e}")

    except asyncio.CancelledError:
        logger.info("Redis pub/sub listener cancelled")
    except Exception as e:
        logger.error(f"Redis pub/sub listener error: {e}")
    finally:
        try:
            if pubsub is not None:
                await pubsub.unsubscribe(WEBSOCKET_CHANNEL)
            if redis_client is not None:
                await redis_client.aclose()
        except Exception as e:
            logger.debug(f"Redis listener cleanup failed: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Create tables, seed roles, start the Redis listener
    - Shutdown: Stop the Redis listener
    """
    global _redis_listener_task, _shutdown_event

    # Startup
    logger.info(f"Starting {settings.APP_NAME} in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    init_db()

    # Start Redis pub/sub listener for WebSocket broadcasts
    _shutdown_event = asyncio.Event()
    if settings.REDIS_PUBSUB_ENABLED:
        _redis_listener_task = asyncio.create_task(redis_pubsub_listener())

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.APP_NAME}")

    # Stop Redis listener
    _shutdown_event.set()
    if _redis_listener_task:
        _redis_listener_task.cancel()
        try:
            await _redis_listener_task
        except asyncio.CancelledError:
            pass
        _redis_listener_task = None


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="""
## Demo Project API

A small REST API showing common backend building blocks.

| Area | Endpoints |
|------|-----------|
| **Hello** | `/`, `/hello`, `/hello/{name}`, `/users` |
| **Products** | In-memory CRUD at `/products` |
| **Todos** | In-memory CRUD at `/todos` |
| **Books** | Database CRUD at `/api/books` (cached, writes need a token) |
| **Auth** | Sign up and sign in at `/api/auth` |
| **Chat** | WebSocket broadcast at `/ws/chat` |
| **Actuator** | Health, info and metrics at `/actuator` |

### Quick Start

```bash
# 1. Register
curl -X POST http://localhost:8080/api/auth/signup \\
  -H "Content-Type: application/json" \\
  -d '{"username": "alice", "email": "alice@example.com", "password": "secret1"}'

# 2. Sign in
curl -X POST http://localhost:8080/api/auth/signin \\
  -H "Content-Type: application/json" \\
  -d '{"username": "alice", "password": "secret1"}'

# 3. Create a book
curl -X POST http://localhost:8080/api/books \\
  -H "Authorization: Bearer {token}" \\
  -H "Content-Type: application/json" \\
  -d '{"title": "Dune", "author": "Frank Herbert", "isbn": "9780441013593"}'
```
""",
    version=settings.APP_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Hello",
            "description": "Plain-text greetings",
        },
        {
            "name": "Products",
            "description": "In-memory product catalogue",
        },
        {
            "name": "Todos",
            "description": "In-memory todo list",
        },
        {
            "name": "Books",
            "description": "Database-backed books with caching",
        },
        {
            "name": "Auth",
            "description": "Sign-up, sign-in and token verification",
        },
        {
            "name": "Tasks",
            "description": "Track background task progress",
        },
        {
            "name": "WebSocket",
            "description": "Chat broadcast and server events",
        },
        {
            "name": "Actuator",
            "description": "Health, info and metrics",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def count_requests(request: Request, call_next):
    """Count served HTTP requests for /actuator/metrics."""
    request_metrics.record()
    return await call_next(request)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(DemoProjectException, demo_project_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(IntegrityError, integrity_error_handler)
app.add_exception_handler(Exception, general_exception_handler)


# =============================================================================
# Routers
# =============================================================================

# Greeting endpoints
app.include_router(
    hello.router,
    tags=["Hello"]
)

# In-memory product endpoints
app.include_router(
    products.router,
    prefix="/products",
    tags=["Products"]
)

# In-memory todo endpoints
app.include_router(
    todos.router,
    prefix="/todos",
    tags=["Todos"]
)

# Book endpoints
app.include_router(
    books.router,
    prefix="/api/books",
    tags=["Books"]
)

# Authentication endpoints
app.include_router(
    auth_routes.router,
    prefix="/api/auth",
    tags=["Auth"]
)

# Task status endpoints
app.include_router(
    tasks.router,
    prefix="/api/tasks",
    tags=["Tasks"]
)

# Actuator endpoints
app.include_router(
    health.router,
    prefix="/actuator",
    tags=["Actuator"]
)

# WebSocket endpoints (chat and server events)
app.include_router(
    websocket_routes.router,
    tags=["WebSocket"]
)


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=settings.is_development)
