"""
==============================================================================
Product Endpoints
==============================================================================

CRUD endpoints for catalog products, plus a dry-run duplicate check.

==============================================================================
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.db.repository import ProductFilters
from app.core.dependencies import PaginationParams, get_pagination
from app.services.product_service import ProductService
from app.schemas.common import MessageResponse, PaginatedResponse
from app.schemas.product import (
    DuplicateCheckRequest,
    DuplicateCheckResponse,
    ProductCreate,
    ProductDetail,
    ProductResponse,
    ProductUpdate,
)


router = APIRouter(prefix="/products", tags=["Products"])


class ProductController:
    """Controller for product operations."""

    def __init__(self, db: Session):
        self._service = ProductService(db)

    def create(self, category_id: int, data: ProductCreate) -> ProductResponse:
        """Create product in a category."""
        product = self._service.create_product(category_id, data)
        return ProductResponse(product=ProductDetail.model_validate(product))

    def list_all(
        self,
        filters: ProductFilters,
        pagination: PaginationParams
    ) -> PaginatedResponse[ProductDetail]:
        """Search products."""
        products, total = self._service.list_products(
            filters,
            offset=pagination.offset,
            limit=pagination.page_size
        )
        return PaginatedResponse[ProductDetail].create(
            items=[ProductDetail.model_validate(p) for p in products],
            total=total,
            page=pagination.page,
            page_size=pagination.page_size
        )

    def get(self, product_id: int) -> ProductResponse:
        """Get product by ID."""
        product = self._service.get_by_id(product_id)
        return ProductResponse(product=ProductDetail.model_validate(product))

    def update(self, product_id: int, data: ProductUpdate) -> ProductResponse:
        """Update product."""
        product = self._service.update_product(product_id, data)
        return ProductResponse(product=ProductDetail.model_validate(product))

    def delete(self, product_id: int) -> MessageResponse:
        """Delete product."""
        name = self._service.delete_product(product_id)
        return MessageResponse(message=f"Product '{name}' deleted")

    def check_duplicate(self, data: DuplicateCheckRequest) -> DuplicateCheckResponse:
        """Run the duplicate detector without saving."""
        conflict = self._service.check_duplicate(data)
        return DuplicateCheckResponse(
            exists=conflict is not None,
            existing_product_id=conflict.id if conflict is not None else None,
            match_mode=self._service.match_mode
        )


@router.get("", response_model=PaginatedResponse[ProductDetail])
async def list_products(
    name: Optional[str] = Query(None, description="Substring of the product name"),
    category_id: Optional[int] = Query(None),
    variation_attribute_id: Optional[int] = Query(None),
    pagination: PaginationParams = Depends(get_pagination),
    db: Session = Depends(get_db)
):
    """List products with optional filters."""
    controller = ProductController(db)
    filters = ProductFilters(
        name=name,
        category_id=category_id,
        variation_attribute_id=variation_attribute_id
    )
    return controller.list_all(filters, pagination)


@router.post("", response_model=ProductResponse, status_code=201)
async def create_product(
    request: ProductCreate,
    category: int = Query(..., description="Category the product is created in"),
    db: Session = Depends(get_db)
):
    """Create a product. Fails with 409 if an equivalent product exists."""
    controller = ProductController(db)
    return controller.create(category, request)


@router.post("/check-duplicate", response_model=DuplicateCheckResponse)
async def check_duplicate(
    request: DuplicateCheckRequest,
    db: Session = Depends(get_db)
):
    """Check whether a product would be a duplicate, without saving it."""
    controller = ProductController(db)
    return controller.check_duplicate(request)


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    product_id: int,
    db: Session = Depends(get_db)
):
    """Get product by ID."""
    controller = ProductController(db)
    return controller.get(product_id)


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: int,
    request: ProductUpdate,
    db: Session = Depends(get_db)
):
    """Update a product. Variation links are replaced, not merged."""
    controller = ProductController(db)
    return controller.update(product_id, request)


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: int,
    db: Session = Depends(get_db)
):
    """Delete a product."""
    controller = ProductController(db)
    return controller.delete(product_id)
