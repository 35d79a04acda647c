"""
==============================================================================
Category Endpoints
==============================================================================

Endpoints for listing and creating product categories.

==============================================================================
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.services.category_service import CategoryService
from app.schemas.category import (
    CategoryChoicesResponse,
    CategoryCreate,
    CategoryDetail,
    CategoryListResponse,
    CategoryResponse,
)


router = APIRouter(prefix="/categories", tags=["Categories"])


class CategoryController:
    """Controller for category operations."""

    def __init__(self, db: Session):
        self._service = CategoryService(db)

    def create(self, data: CategoryCreate) -> CategoryResponse:
        category = self._service.create_category(data)
        return CategoryResponse(category=CategoryDetail.model_validate(category))

    def list_all(self) -> CategoryListResponse:
        categories = self._service.list_categories()
        return CategoryListResponse(
            categories=[CategoryDetail.model_validate(c) for c in categories],
            total=len(categories)
        )

    def choices(self) -> CategoryChoicesResponse:
        return CategoryChoicesResponse(choices=self._service.get_choices())

    def get(self, category_id: int) -> CategoryResponse:
        category = self._service.get_by_id(category_id)
        return CategoryResponse(category=CategoryDetail.model_validate(category))


@router.get("", response_model=CategoryListResponse)
async def list_categories(db: Session = Depends(get_db)):
    """List all categories."""
    controller = CategoryController(db)
    return controller.list_all()


@router.get("/choices", response_model=CategoryChoicesResponse)
async def get_category_choices(db: Session = Depends(get_db)):
    """Category selection list ({id: name}) shown before creating a product."""
    controller = CategoryController(db)
    return controller.choices()


@router.post("", response_model=CategoryResponse, status_code=201)
async def create_category(
    request: CategoryCreate,
    db: Session = Depends(get_db)
):
    """Create a category."""
    controller = CategoryController(db)
    return controller.create(request)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int,
    db: Session = Depends(get_db)
):
    """Get category by ID."""
    controller = CategoryController(db)
    return controller.get(category_id)
