"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes implementing the catalog business logic.

This package provides:
- DuplicateDetector: Catalog duplicate check for product descriptors
- ProductService: Product CRUD with duplicate protection
- CategoryService: Category management
- VariationService: Variation set and attribute management

Architecture Pattern: Service Layer
----------------------------------

    ┌─────────────────┐
    │   API Router    │
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │    Service      │  ← Business Logic
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │   Repository    │  ← Data Access (via ORM)
    └─────────────────┘

Usage:
------
    from app.services import ProductService

    service = ProductService(db_session)
    product = service.create_product(category_id, data)

==============================================================================
"""

from .duplicate_detector import DuplicateDetector, ProductDescriptor, selections_equal
from .product_service import ProductService
from .category_service import CategoryService
from .variation_service import VariationService

__all__ = [
    "DuplicateDetector",
    "ProductDescriptor",
    "selections_equal",
    "ProductService",
    "CategoryService",
    "VariationService",
]
