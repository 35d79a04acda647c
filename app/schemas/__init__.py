"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request and response schemas using Pydantic for validation.

This package provides:
- Common: Shared response schemas
- Category: Category and variation set schemas
- Product: Product and duplicate check schemas

==============================================================================
"""

from .common import MessageResponse, PaginatedResponse
from .category import (
    CategoryCreate,
    CategoryDetail,
    CategoryResponse,
    CategoryListResponse,
    CategoryChoicesResponse,
    VariationSetCreate,
    VariationAttributeCreate,
    VariationAttributeDetail,
    VariationSetDetail,
    VariationSetResponse,
    VariationSetListResponse,
    VariationAttributeResponse,
)
from .product import (
    ProductCreate,
    ProductUpdate,
    ProductDetail,
    ProductVariation,
    ProductResponse,
    DuplicateCheckRequest,
    DuplicateCheckResponse,
)

__all__ = [
    # Common
    "MessageResponse",
    "PaginatedResponse",
    # Category
    "CategoryCreate",
    "CategoryDetail",
    "CategoryResponse",
    "CategoryListResponse",
    "CategoryChoicesResponse",
    # Variation
    "VariationSetCreate",
    "VariationAttributeCreate",
    "VariationAttributeDetail",
    "VariationSetDetail",
    "VariationSetResponse",
    "VariationSetListResponse",
    "VariationAttributeResponse",
    # Product
    "ProductCreate",
    "ProductUpdate",
    "ProductDetail",
    "ProductVariation",
    "ProductResponse",
    "DuplicateCheckRequest",
    "DuplicateCheckResponse",
]
