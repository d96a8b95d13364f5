# =============================================================================
# app/routers/products.py - Product CRUD Endpoints
# =============================================================================
# In-memory product catalogue:
#   GET    /products          all products
#   GET    /products/{id}     one product
#   POST   /products          create
#   PUT    /products/{id}     replace
#   DELETE /products/{id}     delete
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from core.models.product import DeleteMessage, ProductRequest, ProductResponse
from core.services.product_service import ProductService, get_product_service

router = APIRouter()

ProductId = Annotated[int, Path(description="Product id")]


@router.get("", response_model=list[ProductResponse])
def get_all_products(service: ProductService = Depends(get_product_service)):
    """Get all products."""
    return service.list_products()


@router.get("/{product_id}", response_model=ProductResponse)
def get_product_by_id(
    product_id: ProductId,
    service: ProductService = Depends(get_product_service),
):
    """Get a specific product by id."""
    return service.get_product(product_id)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    request: ProductRequest,
    service: ProductService = Depends(get_product_service),
):
    """Create a new product. The id is assigned by the server."""
    return service.create_product(request)


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: ProductId,
    request: ProductRequest,
    service: ProductService = Depends(get_product_service),
):
    """Replace name, description, price and category of a product."""
    return service.update_product(product_id, request)


@router.delete("/{product_id}", response_model=DeleteMessage)
def delete_product(
    product_id: ProductId,
    service: ProductService = Depends(get_product_service),
):
    """Delete a product."""
    return DeleteMessage(message=service.delete_product(product_id))
