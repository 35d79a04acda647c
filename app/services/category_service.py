"""
==============================================================================
Category Service Module
==============================================================================

Category management: listing, lookup, creation and the {id: name}
choice list used when picking a category before creating a product.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core import exceptions
from app.db.models import Category
from app.schemas.category import CategoryCreate


# Module logger
logger = logging.getLogger(__name__)


class CategoryService:
    """
    Category management service.

    Attributes:
        _db: Database session

    Example:
        >>> service = CategoryService(db_session)
        >>> category = service.create_category(CategoryCreate(name="Shirts"))
        >>> service.get_choices()
        {1: 'Shirts'}
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def create_category(self, data: CategoryCreate) -> Category:
        """
        Create a category.

        Raises:
            AppException: CATEGORY_EXISTS if the name is taken
        """
        existing = self._db.query(Category).filter(Category.name == data.name).first()

        if existing:
            logger.warning(f"Category creation failed: name exists - {data.name}")
            raise exceptions.category_exists(data.name)

        category = Category(name=data.name, description=data.description)

        try:
            self._db.add(category)
            self._db.commit()
            self._db.refresh(category)
        except IntegrityError:
            self._db.rollback()
            raise exceptions.category_exists(data.name)

        logger.info(f"✅ Category created: {category.name} (id={category.id})")
        return category

    def get_by_id(self, category_id: int) -> Category:
        """
        Get category by ID.

        Raises:
            AppException: CATEGORY_NOT_FOUND if the category doesn't exist
        """
        category = self._db.query(Category).filter(Category.id == category_id).first()

        if not category:
            raise exceptions.category_not_found(category_id)

        return category

    def list_categories(self) -> List[Category]:
        """List all categories ordered by name."""
        return self._db.query(Category).order_by(Category.name).all()

    def get_choices(self) -> Dict[int, str]:
        """Map category IDs to names."""
        return {category.id: category.name for category in self.list_categories()}
