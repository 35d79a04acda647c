"""
==============================================================================
FastAPI Dependencies Module
==============================================================================

Dependency injection helpers shared by the route modules.

This module implements:
- get_db: Request-scoped database session (re-exported)
- PaginationParams / get_pagination: Consistent paging for list endpoints

Dependency Hierarchy:
--------------------
                    ┌─────────────────┐
                    │   get_db()      │
                    └────────┬────────┘
                             │
                    ┌────────▼────────┐
                    │  Controllers    │ ◀── get_pagination()
                    └─────────────────┘

==============================================================================
"""

from __future__ import annotations

from typing import Dict, Optional

from fastapi import Query

from app.config import get_settings
from app.db.database import get_db


__all__ = ["get_db", "PaginationParams", "get_pagination"]


class PaginationParams:
    """
    Pagination parameters container.

    Attributes:
        page: Current page number (1-indexed)
        page_size: Number of items per page
        offset: Calculated offset for database queries
    """

    def __init__(self, page: int = 1, page_size: int = 20) -> None:
        self.page = page
        self.page_size = page_size
        self.offset = (page - 1) * page_size

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary for convenience."""
        return {
            "page": self.page,
            "page_size": self.page_size,
            "offset": self.offset
        }

    def __repr__(self) -> str:
        return f"PaginationParams(page={self.page}, page_size={self.page_size})"


def get_pagination(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    page_size: Optional[int] = Query(None, ge=1, description="Items per page")
) -> PaginationParams:
    """
    FastAPI dependency for pagination parameters.

    A missing page size falls back to ``default_page_size``; larger values
    are clamped to ``max_page_size``.

    Usage:
        @router.get("/products")
        async def list_products(pagination: PaginationParams = Depends(get_pagination)):
            ...
    """
    settings = get_settings()

    if page_size is None:
        page_size = settings.default_page_size

    return PaginationParams(page=page, page_size=min(page_size, settings.max_page_size))
