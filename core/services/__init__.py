# =============================================================================
# core/services/ - Business Logic Services
# =============================================================================
# - product_service.py: In-memory product store
# - todo_service.py: In-memory todo store
# - book_service.py: Book CRUD with caching
# - auth_service.py: Sign-up and sign-in
# =============================================================================

from .product_service import ProductService, get_product_service, product_service
from .todo_service import TodoService, get_todo_service, todo_service
from .book_service import BookService
from .auth_service import AuthService

__all__ = [
    "ProductService",
    "get_product_service",
    "product_service",
    "TodoService",
    "get_todo_service",
    "todo_service",
    "BookService",
    "AuthService",
]
