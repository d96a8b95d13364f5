# =============================================================================
# app/routers/health.py - Actuator Endpoints
# =============================================================================
# Health, info and metrics for monitoring and load balancers:
#   GET /actuator/health             overall status with component checks
#   GET /actuator/health/liveness    process is alive
#   GET /actuator/health/readiness   dependencies reachable
#   GET /actuator/info               name, version, environment
#   GET /actuator/metrics            uptime, request count, books, websockets
# =============================================================================

import threading
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlmodel import Session

from app.config import settings
from app.websocket import websocket_manager
from core.database import get_session
from core.services.book_service import BookService
from lib.cache import get_cache

router = APIRouter()


class RequestMetrics:
    """Counts HTTP requests served since startup."""

    def __init__(self):
        self.started_at = time.monotonic()
        self._count = 0
        self._lock = threading.Lock()

    def record(self) -> None:
        with self._lock:
            self._count += 1

    @property
    def count(self) -> int:
        return self._count

    @property
    def uptime_seconds(self) -> float:
        return round(time.monotonic() - self.started_at, 3)


# Global singleton instance, fed by the middleware in app.main
request_metrics = RequestMetrics()


# =============================================================================
# Response Models
# =============================================================================

class ComponentHealth(BaseModel):
    """Status of one dependency."""
    status: str
    details: dict | None = None


class HealthResponse(BaseModel):
    """Aggregated health response."""
    status: str
    components: dict[str, ComponentHealth]
    timestamp: str


class ProbeResponse(BaseModel):
    """Liveness/readiness probe response."""
    status: str
    timestamp: str


class InfoResponse(BaseModel):
    """Application info."""
    name: str
    version: str
    environment: str


class MetricsResponse(BaseModel):
    """Runtime counters."""
    uptime_seconds: float
    http_requests_total: int
    books_total: int
    websocket_connections: int
    websocket_topics: list[str]


# =============================================================================
# Checks
# =============================================================================

def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def check_database(session: Session) -> ComponentHealth:
    try:
        session.connection().execute(text("SELECT 1"))
        return ComponentHealth(status="UP", details={"database": session.get_bind().dialect.name})
    except Exception as e:
        return ComponentHealth(status="DOWN", details={"error": str(e)[:100]})


def check_cache() -> ComponentHealth:
    try:
        get_cache().ping()
        return ComponentHealth(status="UP", details={"backend": settings.CACHE_BACKEND})
    except Exception as e:
        return ComponentHealth(status="DOWN", details={"backend": settings.CACHE_BACKEND, "error": str(e)[:100]})


def _health(session: Session) -> HealthResponse:
    components = {
        "db": check_database(session),
        "cache": check_cache(),
    }
    all_up = all(component.status == "UP" for component in components.values())
    return HealthResponse(
        status="UP" if all_up else "DOWN",
        components=components,
        timestamp=_now(),
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
def health_check(session: Session = Depends(get_session)):
    """
    Health check endpoint.

    Returns 503 when any component is DOWN.
    """
    health = _health(session)
    status_code = 200 if health.status == "UP" else 503
    return JSONResponse(status_code=status_code, content=health.model_dump())


@router.get("/health/liveness", response_model=ProbeResponse)
def liveness_check():
    """
    Liveness check endpoint.

    Used by Kubernetes/Docker for restart decisions.
    """
    return ProbeResponse(status="UP", timestamp=_now())


@router.get("/health/readiness", response_model=ProbeResponse)
def readiness_check(session: Session = Depends(get_session)):
    """
    Readiness check endpoint.

    Returns whether the service is ready to accept requests.
    """
    health = _health(session)
    status_code = 200 if health.status == "UP" else 503
    probe = ProbeResponse(status=health.status, timestamp=health.timestamp)
    return JSONResponse(status_code=status_code, content=probe.model_dump())


@router.get("/info", response_model=InfoResponse)
def info():
    return InfoResponse(
        name=settings.APP_NAME,
        version=settings.APP_VERSION,
        environment=settings.ENVIRONMENT,
    )


@router.get("/metrics", response_model=MetricsResponse)
def metrics(session: Session = Depends(get_session)):
    topics = websocket_manager.get_active_topics()
    return MetricsResponse(
        uptime_seconds=request_metrics.uptime_seconds,
        http_requests_total=request_metrics.count,
        books_total=BookService(session).count_books(),
        websocket_connections=websocket_manager.get_connection_count(),
        websocket_topics=topics,
    )
