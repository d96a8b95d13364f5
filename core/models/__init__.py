# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for request/response validation:
# - product.py: In-memory product schemas
# - todo.py: In-memory todo schemas
# - book.py: Book create/update/response schemas and the paged list
# - auth.py: Sign-up/sign-in requests and the JWT response
# - chat.py: WebSocket chat frames
#
# These models define the "contract" between API and clients.
# Table models live in core/database/entities/.
# =============================================================================

# -----------------------------------------------------------------------------
# Product Models
# -----------------------------------------------------------------------------
from .product import (
    DeleteMessage,
    ProductRequest,
    ProductResponse,
)

# -----------------------------------------------------------------------------
# Todo Models
# -----------------------------------------------------------------------------
from .todo import (
    TodoRequest,
    TodoResponse,
)

# -----------------------------------------------------------------------------
# Book Models
# -----------------------------------------------------------------------------
from .book import (
    BookCreate,
    BookPage,
    BookResponse,
    BookUpdate,
)

# -----------------------------------------------------------------------------
# Auth Models
# -----------------------------------------------------------------------------
from .auth import (
    JwtResponse,
    MessageResponse,
    SigninRequest,
    SignupRequest,
)

# -----------------------------------------------------------------------------
# Chat Models
# -----------------------------------------------------------------------------
from .chat import (
    ChatMessage,
    IncomingChatMessage,
    MessageType,
)

# -----------------------------------------------------------------------------
# __all__ - Explicit public API
# -----------------------------------------------------------------------------
__all__ = [
    # Product
    "DeleteMessage",
    "ProductRequest",
    "ProductResponse",
    # Todo
    "TodoRequest",
    "TodoResponse",
    # Book
    "BookCreate",
    "BookPage",
    "BookResponse",
    "BookUpdate",
    # Auth
    "JwtResponse",
    "MessageResponse",
    "SigninRequest",
    "SignupRequest",
    # Chat
    "ChatMessage",
    "IncomingChatMessage",
    "MessageType",
]
