"""
==============================================================================
Category & Variation Schemas Module
==============================================================================

Request and response schemas for categories and variation sets.

==============================================================================
"""

from datetime import datetime
from typing import Dict, List, Optional
from pydantic import BaseModel, Field, field_validator


# =============================================================================
# CATEGORY SCHEMAS
# =============================================================================

class CategoryCreate(BaseModel):
    """Category creation request."""
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class CategoryDetail(BaseModel):
    """Category information."""
    id: int
    name: str
    description: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class CategoryResponse(BaseModel):
    """Single category response."""
    success: bool = Field(default=True)
    category: CategoryDetail


class CategoryListResponse(BaseModel):
    """List of categories response."""
    success: bool = Field(default=True)
    categories: List[CategoryDetail]
    total: int


class CategoryChoicesResponse(BaseModel):
    """Category {id: name} map for selection lists."""
    success: bool = Field(default=True)
    choices: Dict[int, str]


# =============================================================================
# VARIATION SCHEMAS
# =============================================================================

class VariationSetCreate(BaseModel):
    """Variation set creation request, optionally with its attributes."""
    name: str = Field(..., min_length=1, max_length=100)
    attributes: List[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("attributes")
    @classmethod
    def strip_attributes(cls, v: List[str]) -> List[str]:
        stripped = [name.strip() for name in v if name and name.strip()]
        if len({name.lower() for name in stripped}) != len(stripped):
            raise ValueError("Duplicate attribute names not allowed")
        return stripped


class VariationAttributeCreate(BaseModel):
    """Variation attribute creation request."""
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return v.strip()


class VariationAttributeDetail(BaseModel):
    """Variation attribute information."""
    id: int
    variation_set_id: int
    name: str

    class Config:
        from_attributes = True


class VariationSetDetail(BaseModel):
    """Variation set with its attributes."""
    id: int
    name: str
    attributes: List[VariationAttributeDetail]

    class Config:
        from_attributes = True


class VariationSetResponse(BaseModel):
    """Single variation set response."""
    success: bool = Field(default=True)
    variation_set: VariationSetDetail


class VariationSetListResponse(BaseModel):
    """List of variation sets response."""
    success: bool = Field(default=True)
    variation_sets: List[VariationSetDetail]
    total: int


class VariationAttributeResponse(BaseModel):
    """Single variation attribute response."""
    success: bool = Field(default=True)
    attribute: VariationAttributeDetail
