"""
==============================================================================
Duplicate Detector Module
==============================================================================

Decides whether a product descriptor collides with an existing catalog
entry before it is inserted or updated.

Rule:
-----
A candidate conflicts with an existing product when both share the same
name, the same category and the same set of variation attribute choices
(one attribute per variation set, order irrelevant). On update the
product's own row is excluded so a product never conflicts with itself.

Match Modes:
-----------
    exact           {set_id: attribute_id} mappings compared key by key.
                    An empty candidate only matches rows without
                    variation links.

    sorted_values   Attribute IDs sorted by set ID compared as sequences,
                    ignoring which set each attribute sits under. An
                    empty candidate matches any row sharing name and
                    category. Reproduces the old back-office check.

The detector is a read-only check. It does not lock anything: two
concurrent requests can both pass it and both insert.

==============================================================================
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from app.config import get_settings
from app.db.models import Product
from app.db.repository import ProductRepository


# Module logger
logger = logging.getLogger(__name__)


EXACT = "exact"
SORTED_VALUES = "sorted_values"


@dataclass(frozen=True)
class ProductDescriptor:
    """
    Transient description of a product being created or updated.

    Attributes:
        name: Product name
        category_id: Category the product belongs to
        variation_selections: {variation_set_id: variation_attribute_id}
    """

    name: str
    category_id: int
    variation_selections: Mapping[int, int] = field(default_factory=dict)

    @classmethod
    def from_product(cls, product: Product) -> "ProductDescriptor":
        """Build a descriptor from a persisted product."""
        return cls(
            name=product.name,
            category_id=product.category_id,
            variation_selections=product.variation_selections,
        )


def selections_equal(
    candidate: Mapping[int, int],
    existing: Mapping[int, int],
    mode: str = EXACT
) -> bool:
    """
    Compare two variation selections.

    Args:
        candidate: Selection of the product being saved
        existing: Selection rebuilt from a catalog row
        mode: 'exact' or 'sorted_values'

    Returns:
        True if the selections count as the same product
    """
    if mode == SORTED_VALUES:
        return _sorted_values(candidate) == _sorted_values(existing)
    return dict(candidate) == dict(existing)


def _sorted_values(selection: Mapping[int, int]) -> List[int]:
    return [selection[key] for key in sorted(selection)]


class DuplicateDetector:
    """
    Checks a ProductDescriptor against the persisted catalog.

    Attributes:
        _repository: ProductRepository used for the candidate query
        _mode: Comparison mode ('exact' or 'sorted_values')

    Example:
        >>> detector = DuplicateDetector(ProductRepository(db_session))
        >>> candidate = ProductDescriptor("Widget", 1, {1: 10, 2: 20})
        >>> detector.exists(candidate)
        False
    """

    def __init__(
        self,
        repository: ProductRepository,
        mode: Optional[str] = None
    ) -> None:
        self._repository = repository
        self._mode = mode or get_settings().duplicate_match_mode

    @property
    def mode(self) -> str:
        """Comparison mode in use."""
        return self._mode

    def exists(
        self,
        candidate: ProductDescriptor,
        exclude_id: Optional[int] = None
    ) -> bool:
        """
        Check whether an equivalent product is already in the catalog.

        Args:
            candidate: Product being created or updated
            exclude_id: ID of the product being updated, if any

        Returns:
            True if a conflicting product exists
        """
        return self.find_conflict(candidate, exclude_id) is not None

    def find_conflict(
        self,
        candidate: ProductDescriptor,
        exclude_id: Optional[int] = None
    ) -> Optional[Product]:
        """
        Return the first catalog product that conflicts with the candidate.

        Args:
            candidate: Product being created or updated
            exclude_id: ID of the product being updated, if any

        Returns:
            Conflicting Product, or None
        """
        rows = self._repository.find_candidates(
            candidate.name,
            candidate.category_id,
            exclude_id=exclude_id
        )

        if not rows:
            return None

        selection: Dict[int, int] = dict(candidate.variation_selections)

        if not selection and self._mode == SORTED_VALUES:
            conflict = rows[0]
        else:
            conflict = next(
                (
                    row for row in rows
                    if selections_equal(selection, row.variation_selections, self._mode)
                ),
                None
            )

        if conflict is not None:
            logger.info(
                f"Duplicate product detected: {candidate.name!r} "
                f"(category {candidate.category_id}) matches product {conflict.id}"
            )
        else:
            logger.debug(
                f"No duplicate for {candidate.name!r} among {len(rows)} "
                f"product(s) sharing name and category"
            )

        return conflict
