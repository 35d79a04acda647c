"""
==============================================================================
Product Schemas Module
==============================================================================

Request and response schemas for product operations.

Field rules (required name, price not negative, variation ownership) are
enforced by ProductValidator in the service layer, so the request
schemas only describe shapes.

==============================================================================
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class ProductCreate(BaseModel):
    """Product creation request. The category comes from the URL."""
    name: Optional[str] = Field(default=None)
    description: Optional[str] = Field(default=None)
    price: Optional[Decimal] = Field(default=None)
    variations: Dict[int, Optional[int]] = Field(
        default_factory=dict,
        description="Chosen attribute per variation set: {variation_set_id: attribute_id}"
    )

    @field_validator("name", "description")
    @classmethod
    def strip_whitespace(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else None


class ProductUpdate(BaseModel):
    """Product update request. Omitted fields keep their current values."""
    name: Optional[str] = Field(default=None)
    category_id: Optional[int] = Field(default=None)
    description: Optional[str] = Field(default=None)
    price: Optional[Decimal] = Field(default=None)
    variations: Optional[Dict[int, Optional[int]]] = Field(
        default=None,
        description="Replaces the whole selection when sent"
    )

    @field_validator("name", "description")
    @classmethod
    def strip_whitespace(cls, v: Optional[str]) -> Optional[str]:
        return v.strip() if v is not None else None


class DuplicateCheckRequest(BaseModel):
    """Dry-run duplicate check."""
    name: str = Field(..., min_length=1, max_length=255)
    category_id: int
    variations: Dict[int, Optional[int]] = Field(default_factory=dict)
    exclude_id: Optional[int] = Field(default=None)


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class ProductVariation(BaseModel):
    """Variation attribute linked to a product."""
    id: int
    variation_set_id: int
    name: str

    class Config:
        from_attributes = True


class ProductDetail(BaseModel):
    """Detailed product information."""
    id: int
    name: str
    category_id: int
    description: Optional[str] = None
    price: Optional[float] = None
    variation_selections: Dict[int, int]
    variation_attributes: List[ProductVariation]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ProductResponse(BaseModel):
    """Single product response."""
    success: bool = Field(default=True)
    product: ProductDetail


class DuplicateCheckResponse(BaseModel):
    """Duplicate check result."""
    success: bool = Field(default=True)
    exists: bool
    existing_product_id: Optional[int] = None
    match_mode: str
