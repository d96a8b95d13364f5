# =============================================================================
# core/services/product_service.py - In-Memory Product Catalogue
# =============================================================================
# Products live in a process-local list; ids come from a counter that only
# grows, so a deleted id is never handed out again.
# =============================================================================

import logging
import threading

from app.exceptions import ResourceNotFoundError
from core.models.product import ProductRequest, ProductResponse

logger = logging.getLogger(__name__)

SEED_PRODUCTS = [
    ProductRequest(name="Red Pen", description="This is red pen", price=20.00, category="Pen"),
    ProductRequest(name="Black Pen", description="This is black pen", price=10.00, category="Pen"),
    ProductRequest(name="Blue Pen", description="This is blue pen", price=15.00, category="Pen"),
    ProductRequest(name="Book", description="This is a story book", price=399.00, category="Book"),
]


class ProductService:
    """
    Service for the in-memory product catalogue.

    Thread-safe: route handlers run in a threadpool.
    """

    def __init__(self, seed: bool = True):
        self._lock = threading.Lock()
        self._products: list[ProductResponse] = []
        self._last_id = 0
        if seed:
            for product in SEED_PRODUCTS:
                self.create_product(product)

    def _next_id(self) -> int:
        self._last_id += 1
        return self._last_id

    def _find(self, product_id: int) -> ProductResponse:
        for product in self._products:
            if product.id == product_id:
                return product
        raise ResourceNotFoundError("Product", "id", product_id)

    def list_products(self) -> list[ProductResponse]:
        with self._lock:
            return list(self._products)

    def get_product(self, product_id: int) -> ProductResponse:
        """
        Raises:
            ResourceNotFoundError: If no product has this id
        """
        with self._lock:
            return self._find(product_id)

    def create_product(self, data: ProductRequest) -> ProductResponse:
        with self._lock:
            product = ProductResponse(id=self._next_id(), **data.model_dump())
            self._products.append(product)
        logger.info(f"Created product {product.id}: {product.name}")
        return product

    def update_product(self, product_id: int, data: ProductRequest) -> ProductResponse:
        """
        Replace every field of an existing product.

        Raises:
            ResourceNotFoundError: If no product has this id
        """
        with self._lock:
            existing = self._find(product_id)
            updated = existing.model_copy(update=data.model_dump())
            self._products[self._products.index(existing)] = updated
        logger.info(f"Updated product {product_id}")
        return updated

    def delete_product(self, product_id: int) -> str:
        """
        Raises:
            ResourceNotFoundError: If no product has this id
        """
        with self._lock:
            self._products.remove(self._find(product_id))
        logger.info(f"Deleted product {product_id}")
        return f"Product with id {product_id} has been deleted"


# Global singleton instance
product_service = ProductService()


def get_product_service() -> ProductService:
    """Dependency returning the shared catalogue."""
    return product_service
