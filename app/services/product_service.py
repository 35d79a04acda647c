"""
==============================================================================
Product Service Module
==============================================================================

Service for catalog product management.

This module implements:
- ProductService: Create / update / delete / view / search products
- Duplicate detection before every create and update
- Replace semantics for variation links on update

Create / Update Flow:
--------------------
    request data
         │
         ▼
    resolve category ──────────▶ CATEGORY_NOT_FOUND (404)
         │
         ▼
    drop empty variation choices
         │
         ▼
    ProductValidator ──────────▶ VALIDATION_ERROR (422)
         │
         ▼
    DuplicateDetector ─────────▶ PRODUCT_EXISTS (409)
         │
         ▼
    save product, clear old links (update), link chosen attributes

The duplicate check and the write run in the same session but not under
a lock; concurrent identical requests can both pass the check.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core import exceptions
from app.db.models import Product
from app.db.repository import ProductFilters, ProductRepository
from app.services.duplicate_detector import DuplicateDetector, ProductDescriptor
from app.utils.validators import ProductValidator, filter_selections
from app.schemas.product import DuplicateCheckRequest, ProductCreate, ProductUpdate


# Module logger
logger = logging.getLogger(__name__)


class ProductService:
    """
    Service for product CRUD with duplicate protection.

    Attributes:
        _db: Database session
        _repository: ProductRepository for data access
        _detector: DuplicateDetector run before writes
        _validator: ProductValidator for field rules

    Example:
        >>> service = ProductService(db_session)
        >>> product = service.create_product(1, ProductCreate(
        ...     name="Widget",
        ...     variations={1: 10, 2: 20}
        ... ))
        >>> service.update_product(product.id, ProductUpdate(price=9.99))
    """

    def __init__(
        self,
        db: Session,
        detector: Optional[DuplicateDetector] = None
    ) -> None:
        """
        Initialize the product service.

        Args:
            db: SQLAlchemy database session
            detector: Optional DuplicateDetector (built from settings if None)
        """
        self._db = db
        self._repository = ProductRepository(db)
        self._detector = detector or DuplicateDetector(self._repository)
        self._validator = ProductValidator()

    # =========================================================================
    # CREATE OPERATIONS
    # =========================================================================

    def create_product(self, category_id: int, data: ProductCreate) -> Product:
        """
        Create a product in a category.

        Args:
            category_id: Target category
            data: Product fields and variation choices

        Returns:
            Created Product with its variation attributes

        Raises:
            AppException: CATEGORY_NOT_FOUND, VALIDATION_ERROR, PRODUCT_EXISTS
        """
        self._require_category(category_id)

        variations = filter_selections(data.variations)
        self._validate(data.name, category_id, data.price, data.description, variations)

        candidate = ProductDescriptor(data.name, category_id, variations)
        self._ensure_unique(candidate)

        product = Product(
            name=data.name,
            category_id=category_id,
            description=data.description,
            price=data.price,
        )

        try:
            self._repository.add(product)
            self._link_variations(product.id, variations)
            self._db.commit()
        except IntegrityError as e:
            self._db.rollback()
            logger.warning(f"Product insert rejected by the database: {data.name!r}")
            raise self._integrity_failure(category_id) from e

        logger.info(
            f"✅ Product created: {product.name!r} (id={product.id}, "
            f"category={category_id}, variations={variations})"
        )
        return self.get_by_id(product.id)

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def get_by_id(self, product_id: int) -> Product:
        """
        Get product by ID.

        Raises:
            AppException: PRODUCT_NOT_FOUND if product doesn't exist
        """
        product = self._repository.get(product_id)

        if not product:
            logger.warning(f"Product not found: {product_id}")
            raise exceptions.product_not_found(product_id)

        return product

    def list_products(
        self,
        filters: Optional[ProductFilters] = None,
        offset: int = 0,
        limit: int = 20
    ) -> Tuple[List[Product], int]:
        """
        Search products.

        Args:
            filters: Optional name / category / attribute filters
            offset: Pagination offset
            limit: Pagination limit

        Returns:
            Tuple of (products, total count)
        """
        return self._repository.search(filters or ProductFilters(), offset, limit)

    # =========================================================================
    # UPDATE OPERATIONS
    # =========================================================================

    def update_product(self, product_id: int, data: ProductUpdate) -> Product:
        """
        Update a product.

        Fields that were not sent keep their current values. When
        ``variations`` is sent, it replaces the whole selection.

        Raises:
            AppException: PRODUCT_NOT_FOUND, CATEGORY_NOT_FOUND,
                VALIDATION_ERROR, PRODUCT_EXISTS
        """
        product = self.get_by_id(product_id)
        sent = data.model_fields_set

        name = data.name if "name" in sent else product.name
        category_id = data.category_id if data.category_id is not None else product.category_id
        description = data.description if "description" in sent else product.description
        price = data.price if "price" in sent else product.price

        if data.variations is None:
            variations = product.variation_selections
        else:
            variations = filter_selections(data.variations)

        if category_id != product.category_id:
            self._require_category(category_id)

        self._validate(name, category_id, price, description, variations)

        candidate = ProductDescriptor(name, category_id, variations)
        self._ensure_unique(candidate, exclude_id=product.id)

        product.name = name
        product.category_id = category_id
        product.description = description
        product.price = price

        try:
            self._db.flush()
            self._repository.clear_variation_links(product.id)
            self._link_variations(product.id, variations)
            self._db.commit()
        except IntegrityError as e:
            self._db.rollback()
            logger.warning(f"Product update rejected by the database: {product_id}")
            raise self._integrity_failure(category_id) from e

        logger.info(f"Product updated: {name!r} (id={product.id}, variations={variations})")
        return self.get_by_id(product.id)

    # =========================================================================
    # DELETE OPERATIONS
    # =========================================================================

    def delete_product(self, product_id: int) -> str:
        """
        Delete a product and its variation links.

        Returns:
            Name of the deleted product
        """
        product = self.get_by_id(product_id)
        name = product.name

        self._repository.delete(product)
        self._db.commit()

        logger.warning(f"⚠️ Product deleted: {name!r} (id={product_id})")
        return name

    # =========================================================================
    # DUPLICATE CHECK
    # =========================================================================

    def check_duplicate(self, data: DuplicateCheckRequest) -> Optional[Product]:
        """
        Run the duplicate detector without writing anything.

        The candidate goes through the same category and field checks as
        a create, so only well-formed descriptors reach the detector.

        Returns:
            The conflicting product, or None

        Raises:
            AppException: CATEGORY_NOT_FOUND, VALIDATION_ERROR
        """
        name = data.name.strip()
        self._require_category(data.category_id)

        variations = filter_selections(data.variations)
        self._validate(name, data.category_id, None, None, variations)

        candidate = ProductDescriptor(name, data.category_id, variations)
        return self._detector.find_conflict(candidate, exclude_id=data.exclude_id)

    @property
    def match_mode(self) -> str:
        """Comparison mode used by the detector."""
        return self._detector.mode

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _require_category(self, category_id: int) -> None:
        if self._repository.get_category(category_id) is None:
            logger.warning(f"Category not found: {category_id}")
            raise exceptions.category_not_found(category_id)

    def _validate(self, name, category_id, price, description, variations: Dict[int, int]) -> None:
        attributes = self._repository.get_attributes(list(variations.values()))
        attribute_sets = {attribute.id: attribute.variation_set_id for attribute in attributes}

        result = self._validator.validate(
            name=name,
            category_id=category_id,
            price=price,
            description=description,
            variations=variations,
            attribute_sets=attribute_sets,
        )

        if not result.is_valid:
            logger.info(f"Product validation failed: {result.to_list()}")
            raise exceptions.validation_error(result.to_list())

    def _ensure_unique(
        self,
        candidate: ProductDescriptor,
        exclude_id: Optional[int] = None
    ) -> None:
        conflict = self._detector.find_conflict(candidate, exclude_id=exclude_id)

        if conflict is not None:
            logger.warning(
                f"Product save refused, duplicate of {conflict.id}: {candidate.name!r}"
            )
            raise exceptions.product_exists(candidate.name, conflict.id)

    def _integrity_failure(self, category_id: int) -> exceptions.AppException:
        # Category removed between the check and the write
        if self._repository.get_category(category_id) is None:
            return exceptions.category_not_found(category_id)
        return exceptions.internal_error("Product could not be saved")

    def _link_variations(self, product_id: int, variations: Dict[int, int]) -> None:
        for attribute_id in variations.values():
            self._repository.add_variation_link(product_id, attribute_id)
