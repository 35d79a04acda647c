"""
==============================================================================
Variation Set Endpoints
==============================================================================

Endpoints for variation sets and their attributes.

==============================================================================
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.services.variation_service import VariationService
from app.schemas.category import (
    VariationAttributeCreate,
    VariationAttributeDetail,
    VariationAttributeResponse,
    VariationSetCreate,
    VariationSetDetail,
    VariationSetListResponse,
    VariationSetResponse,
)


router = APIRouter(prefix="/variation-sets", tags=["Variations"])


class VariationController:
    """Controller for variation set operations."""

    def __init__(self, db: Session):
        self._service = VariationService(db)

    def create(self, data: VariationSetCreate) -> VariationSetResponse:
        variation_set = self._service.create_set(data)
        return VariationSetResponse(variation_set=VariationSetDetail.model_validate(variation_set))

    def list_all(self) -> VariationSetListResponse:
        sets = self._service.list_sets()
        return VariationSetListResponse(
            variation_sets=[VariationSetDetail.model_validate(s) for s in sets],
            total=len(sets)
        )

    def get(self, set_id: int) -> VariationSetResponse:
        variation_set = self._service.get_set(set_id)
        return VariationSetResponse(variation_set=VariationSetDetail.model_validate(variation_set))

    def add_attribute(self, set_id: int, data: VariationAttributeCreate) -> VariationAttributeResponse:
        attribute = self._service.add_attribute(set_id, data)
        return VariationAttributeResponse(attribute=VariationAttributeDetail.model_validate(attribute))


@router.get("", response_model=VariationSetListResponse)
async def list_variation_sets(db: Session = Depends(get_db)):
    """List variation sets with their attributes."""
    controller = VariationController(db)
    return controller.list_all()


@router.post("", response_model=VariationSetResponse, status_code=201)
async def create_variation_set(
    request: VariationSetCreate,
    db: Session = Depends(get_db)
):
    """Create a variation set, optionally with attributes."""
    controller = VariationController(db)
    return controller.create(request)


@router.get("/{set_id}", response_model=VariationSetResponse)
async def get_variation_set(
    set_id: int,
    db: Session = Depends(get_db)
):
    """Get a variation set by ID."""
    controller = VariationController(db)
    return controller.get(set_id)


@router.post("/{set_id}/attributes", response_model=VariationAttributeResponse, status_code=201)
async def add_variation_attribute(
    set_id: int,
    request: VariationAttributeCreate,
    db: Session = Depends(get_db)
):
    """Add an attribute to a variation set."""
    controller = VariationController(db)
    return controller.add_attribute(set_id, request)
