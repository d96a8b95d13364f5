# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - hello.py: Plain-text greeting endpoints
# - products.py: In-memory product CRUD
# - todos.py: In-memory todo CRUD
# - books.py: Database-backed book CRUD (cached, JWT protected writes)
# - tasks.py: Background task status endpoints
# - health.py: Actuator health/info/metrics endpoints
#
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import hello
from . import products
from . import todos
from . import books
from . import tasks
from . import health

__all__ = [
    "hello",
    "products",
    "todos",
    "books",
    "tasks",
    "health",
]
