# =============================================================================
# app/routers/hello.py - Greeting Endpoints
# =============================================================================
# Plain-text endpoints used to check the server is wired up.
# =============================================================================

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter(default_response_class=PlainTextResponse)


@router.get("/")
def index() -> str:
    """Index page."""
    return "Hello World! This is index page"


@router.get("/hello")
def hello_default() -> str:
    return "Hello Sujan"


@router.get("/hello/{name}")
def hello(name: str) -> str:
    """Greet the name given in the path."""
    return f"Hello {name}"


@router.get("/users")
def users() -> str:
    return "Hello Users"
