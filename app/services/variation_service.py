"""
==============================================================================
Variation Service Module
==============================================================================

Management of variation sets (e.g. "Color") and their attributes
(e.g. "Red", "Blue").

==============================================================================
"""

from __future__ import annotations

import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.core import exceptions
from app.db.models import VariationAttribute, VariationSet
from app.schemas.category import VariationAttributeCreate, VariationSetCreate


# Module logger
logger = logging.getLogger(__name__)


class VariationService:
    """
    Variation set and attribute management.

    Attributes:
        _db: Database session

    Example:
        >>> service = VariationService(db_session)
        >>> color = service.create_set(VariationSetCreate(name="Color", attributes=["Red"]))
        >>> blue = service.add_attribute(color.id, VariationAttributeCreate(name="Blue"))
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    # =========================================================================
    # VARIATION SETS
    # =========================================================================

    def create_set(self, data: VariationSetCreate) -> VariationSet:
        """
        Create a variation set with optional initial attributes.

        Raises:
            AppException: VARIATION_SET_EXISTS if the name is taken
        """
        existing = self._db.query(VariationSet).filter(VariationSet.name == data.name).first()

        if existing:
            logger.warning(f"Variation set creation failed: name exists - {data.name}")
            raise exceptions.variation_set_exists(data.name)

        variation_set = VariationSet(name=data.name)
        for attribute_name in data.attributes:
            variation_set.attributes.append(VariationAttribute(name=attribute_name))

        try:
            self._db.add(variation_set)
            self._db.commit()
        except IntegrityError:
            self._db.rollback()
            raise exceptions.variation_set_exists(data.name)

        logger.info(
            f"✅ Variation set created: {data.name} "
            f"with {len(data.attributes)} attribute(s)"
        )
        return self.get_set(variation_set.id)

    def get_set(self, set_id: int) -> VariationSet:
        """
        Get a variation set with its attributes.

        Raises:
            AppException: VARIATION_SET_NOT_FOUND
        """
        variation_set = (
            self._db.query(VariationSet)
            .options(selectinload(VariationSet.attributes))
            .populate_existing()
            .filter(VariationSet.id == set_id)
            .first()
        )

        if not variation_set:
            raise exceptions.variation_set_not_found(set_id)

        return variation_set

    def list_sets(self) -> List[VariationSet]:
        """List variation sets with their attributes."""
        return (
            self._db.query(VariationSet)
            .options(selectinload(VariationSet.attributes))
            .order_by(VariationSet.name)
            .all()
        )

    # =========================================================================
    # ATTRIBUTES
    # =========================================================================

    def add_attribute(self, set_id: int, data: VariationAttributeCreate) -> VariationAttribute:
        """
        Add an attribute to a variation set.

        Raises:
            AppException: VARIATION_SET_NOT_FOUND, VARIATION_ATTRIBUTE_EXISTS
        """
        variation_set = self.get_set(set_id)

        if any(attribute.name.lower() == data.name.lower() for attribute in variation_set.attributes):
            raise exceptions.variation_attribute_exists(set_id, data.name)

        attribute = VariationAttribute(variation_set_id=set_id, name=data.name)

        try:
            self._db.add(attribute)
            self._db.commit()
            self._db.refresh(attribute)
        except IntegrityError:
            self._db.rollback()
            raise exceptions.variation_attribute_exists(set_id, data.name)

        logger.info(f"Variation attribute added: {variation_set.name}={attribute.name}")
        return attribute
