"""
==============================================================================
Product Repository Module
==============================================================================

Data access seam between the catalog services and the ORM.

The duplicate detector only needs one read operation from the catalog:
"find all products with a given name and category (optionally excluding
one id), each with its variation attributes loaded". The product service
additionally needs explicit insert / delete operations on the
product_variation_attribute association table.

==============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, selectinload

from app.db.models import (
    Category,
    Product,
    VariationAttribute,
    product_variation_attribute,
)


# Module logger
logger = logging.getLogger(__name__)


@dataclass
class ProductFilters:
    """Optional filters for product searches; None means "not filtered"."""

    name: Optional[str] = None
    category_id: Optional[int] = None
    variation_attribute_id: Optional[int] = None


class ProductRepository:
    """
    Repository for Product rows and their variation links.

    Attributes:
        _db: Database session

    Example:
        >>> repo = ProductRepository(db_session)
        >>> rows = repo.find_candidates("Widget", category_id=1)
        >>> repo.clear_variation_links(product.id)
        >>> repo.add_variation_link(product.id, 10)
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    # =========================================================================
    # DUPLICATE DETECTION QUERY
    # =========================================================================

    def find_candidates(
        self,
        name: str,
        category_id: int,
        exclude_id: Optional[int] = None
    ) -> List[Product]:
        """
        Find products sharing a name and category.

        Args:
            name: Product name to match exactly
            category_id: Category to match
            exclude_id: Product ID to leave out (update case)

        Returns:
            Matching products with variation attributes eagerly loaded
        """
        query = (
            self._db.query(Product)
            .options(selectinload(Product.variation_attributes))
            .populate_existing()
            .filter(Product.name == name)
            .filter(Product.category_id == category_id)
        )

        if exclude_id is not None:
            query = query.filter(Product.id != exclude_id)

        return query.order_by(Product.id).all()

    # =========================================================================
    # VARIATION LINKS
    # =========================================================================

    def add_variation_link(self, product_id: int, attribute_id: int) -> None:
        """Link a variation attribute to a product."""
        self._db.execute(
            product_variation_attribute.insert().values(
                product_id=product_id,
                variation_attribute_id=attribute_id,
            )
        )

    def clear_variation_links(self, product_id: int) -> None:
        """Remove every variation attribute link of a product."""
        self._db.execute(
            product_variation_attribute.delete().where(
                product_variation_attribute.c.product_id == product_id
            )
        )

    # =========================================================================
    # PRODUCT CRUD
    # =========================================================================

    def get(self, product_id: int) -> Optional[Product]:
        """Get a product with its category and variation attributes."""
        return (
            self._db.query(Product)
            .options(
                selectinload(Product.variation_attributes),
                selectinload(Product.category),
            )
            .populate_existing()
            .filter(Product.id == product_id)
            .first()
        )

    def add(self, product: Product) -> Product:
        """Stage a new product and flush it so it gets an ID."""
        self._db.add(product)
        self._db.flush()
        return product

    def delete(self, product: Product) -> None:
        """Delete a product; the ORM removes its variation links."""
        self._db.delete(product)

    def search(
        self,
        filters: ProductFilters,
        offset: int = 0,
        limit: int = 20
    ) -> Tuple[List[Product], int]:
        """
        Search products.

        Args:
            filters: Name substring, category and attribute filters
            offset: Pagination offset
            limit: Pagination limit

        Returns:
            Tuple of (page of products, total matching count)
        """
        query = self._db.query(Product)

        if filters.name:
            query = query.filter(Product.name.ilike(f"%{filters.name}%"))

        if filters.category_id is not None:
            query = query.filter(Product.category_id == filters.category_id)

        if filters.variation_attribute_id is not None:
            query = query.filter(
                Product.variation_attributes.any(
                    VariationAttribute.id == filters.variation_attribute_id
                )
            )

        total = query.count()
        items = (
            query.options(selectinload(Product.variation_attributes))
            .populate_existing()
            .order_by(Product.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )

        return items, total

    # =========================================================================
    # LOOKUPS
    # =========================================================================

    def get_category(self, category_id: int) -> Optional[Category]:
        """Get a category by ID."""
        return self._db.query(Category).filter(Category.id == category_id).first()

    def get_attributes(self, attribute_ids: List[int]) -> List[VariationAttribute]:
        """Load variation attributes by ID; unknown IDs are simply absent."""
        if not attribute_ids:
            return []
        return (
            self._db.query(VariationAttribute)
            .filter(VariationAttribute.id.in_(attribute_ids))
            .all()
        )
