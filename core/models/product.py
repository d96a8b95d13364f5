# =============================================================================
# core/models/product.py - Product Schemas
# =============================================================================
# - ProductRequest: Body for POST/PUT /products
# - ProductResponse: A product as stored in the catalogue
# =============================================================================

from pydantic import BaseModel, Field, field_validator


class ProductRequest(BaseModel):
    """
    Schema for creating or replacing a product.

    Example:
        {
            "name": "Green Pen",
            "description": "This is green pen",
            "price": 12.5,
            "category": "Pen"
        }
    """

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Product name"
    )

    description: str | None = Field(
        default=None,
        max_length=500,
        description="Free-text description"
    )

    price: float = Field(
        default=0.0,
        ge=0,
        description="Unit price"
    )

    category: str | None = Field(
        default=None,
        max_length=50,
        description="Product category (e.g., Pen, Book)"
    )

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v.strip()


class ProductResponse(BaseModel):
    """A product in the in-memory catalogue."""

    id: int
    name: str
    description: str | None = None
    price: float = 0.0
    category: str | None = None


class DeleteMessage(BaseModel):
    """Confirmation returned after a delete."""

    message: str
