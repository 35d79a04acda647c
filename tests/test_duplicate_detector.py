"""
==============================================================================
Duplicate Detector Tests
==============================================================================

Catalog duplicate detection against a real (in-memory) database.

==============================================================================
"""

import pytest
from sqlalchemy.orm import Session

from app.db.repository import ProductRepository
from app.services.duplicate_detector import (
    EXACT,
    SORTED_VALUES,
    DuplicateDetector,
    ProductDescriptor,
    selections_equal,
)


@pytest.fixture
def detector(db: Session) -> DuplicateDetector:
    return DuplicateDetector(ProductRepository(db), mode=EXACT)


@pytest.fixture
def legacy_detector(db: Session) -> DuplicateDetector:
    return DuplicateDetector(ProductRepository(db), mode=SORTED_VALUES)


class TestSelectionsEqual:
    """Tests for the selection comparison."""

    def test_order_is_irrelevant(self):
        assert selections_equal({1: 10, 2: 20}, {2: 20, 1: 10})

    def test_subset_is_different(self):
        assert not selections_equal({1: 10}, {1: 10, 2: 20})
        assert not selections_equal({1: 10}, {1: 10, 2: 20}, SORTED_VALUES)

    def test_empty_selections_are_equal(self):
        assert selections_equal({}, {})

    def test_exact_mode_checks_pairing(self):
        assert not selections_equal({1: 10, 2: 20}, {1: 10, 3: 20}, EXACT)

    def test_sorted_values_mode_ignores_pairing(self):
        assert selections_equal({1: 10, 2: 20}, {1: 10, 3: 20}, SORTED_VALUES)


class TestDuplicateDetector:
    """Tests for DuplicateDetector.exists."""

    def test_empty_catalog(self, detector: DuplicateDetector, category):
        candidate = ProductDescriptor("Widget", 1, {})
        assert detector.exists(candidate) is False

    def test_no_variations_without_matching_name(self, detector, make_product):
        make_product(name="Gizmo")
        assert detector.exists(ProductDescriptor("Widget", 1, {})) is False

    def test_no_variations_matches_plain_product(self, detector, make_product):
        make_product(name="Widget")
        assert detector.exists(ProductDescriptor("Widget", 1, {})) is True

    def test_same_variations_different_insertion_order(self, detector, make_product):
        make_product(variations={1: 10, 2: 20})
        candidate = ProductDescriptor("Widget", 1, {2: 20, 1: 10})
        assert detector.exists(candidate) is True

    def test_subset_of_variations_is_not_duplicate(self, detector, make_product):
        make_product(variations={1: 10, 2: 20})
        candidate = ProductDescriptor("Widget", 1, {1: 10})
        assert detector.exists(candidate) is False

    def test_superset_of_variations_is_not_duplicate(self, detector, make_product):
        make_product(variations={1: 10})
        candidate = ProductDescriptor("Widget", 1, {1: 10, 2: 20})
        assert detector.exists(candidate) is False

    def test_different_category_is_not_duplicate(self, detector, make_product, other_category):
        make_product(variations={1: 10})
        candidate = ProductDescriptor("Widget", 2, {1: 10})
        assert detector.exists(candidate) is False

    def test_product_never_conflicts_with_itself(self, detector, make_product):
        product = make_product(product_id=5)
        candidate = ProductDescriptor.from_product(product)
        assert detector.exists(candidate, exclude_id=5) is False

    def test_self_exclusion_with_variations(self, detector, make_product):
        product = make_product(variations={1: 11, 2: 21})
        candidate = ProductDescriptor.from_product(product)
        assert detector.exists(candidate) is True
        assert detector.exists(candidate, exclude_id=product.id) is False

    def test_exclusion_keeps_other_duplicates(self, detector, make_product):
        first = make_product(variations={1: 10})
        make_product(variations={1: 10})
        candidate = ProductDescriptor("Widget", 1, {1: 10})
        assert detector.exists(candidate, exclude_id=first.id) is True

    def test_disjoint_variation_sets(self, detector, make_product):
        red_small = make_product(variations={1: 10, 2: 20})
        make_product(variations={1: 11, 2: 21})

        conflict = detector.find_conflict(ProductDescriptor("Widget", 1, {1: 10, 2: 20}))
        assert conflict is not None
        assert conflict.id == red_small.id

        assert detector.exists(ProductDescriptor("Widget", 1, {1: 10, 2: 21})) is False

    def test_no_variations_ignores_products_with_variations(self, detector, make_product):
        make_product(variations={1: 10})
        assert detector.exists(ProductDescriptor("Widget", 1, {})) is False


class TestLegacyMatchMode:
    """Tests for the sorted_values comparison mode."""

    def test_pairing_is_ignored(self, legacy_detector, make_product):
        make_product(variations={1: 10, 3: 30})
        # Same attribute IDs in key order, different sets: a known false positive
        candidate = ProductDescriptor("Widget", 1, {1: 10, 2: 30})
        assert legacy_detector.exists(candidate) is True

    def test_no_variations_matches_any_row(self, legacy_detector, make_product):
        make_product(variations={1: 10})
        assert legacy_detector.exists(ProductDescriptor("Widget", 1, {})) is True

    def test_subset_is_not_duplicate(self, legacy_detector, make_product):
        make_product(variations={1: 10, 2: 20})
        assert legacy_detector.exists(ProductDescriptor("Widget", 1, {1: 10})) is False

    def test_self_exclusion(self, legacy_detector, make_product):
        product = make_product(product_id=5)
        candidate = ProductDescriptor.from_product(product)
        assert legacy_detector.exists(candidate, exclude_id=5) is False
