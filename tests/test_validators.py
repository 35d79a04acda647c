"""
==============================================================================
Validator Tests
==============================================================================

Tests for product payload validation and variation choice filtering.

==============================================================================
"""

from decimal import Decimal

from app.utils.validators import ProductValidator, filter_selections


class TestFilterSelections:
    """Tests for filter_selections."""

    def test_empty_input(self):
        assert filter_selections(None) == {}
        assert filter_selections({}) == {}

    def test_drops_unselected_sets(self):
        raw = {"1": "10", "2": "", "3": None, "4": 0, "5": "0"}
        assert filter_selections(raw) == {1: 10}

    def test_casts_to_int(self):
        assert filter_selections({"2": "20", 1: 10}) == {1: 10, 2: 20}


class TestProductValidator:
    """Tests for ProductValidator."""

    def setup_method(self):
        self.validator = ProductValidator()

    def test_valid_payload(self):
        result = self.validator.validate(
            name="Widget",
            category_id=1,
            price=Decimal("9.99"),
            variations={1: 10},
            attribute_sets={10: 1},
        )
        assert result.is_valid
        assert result.to_list() == []

    def test_name_required(self):
        result = self.validator.validate(name="  ", category_id=1)
        assert not result.is_valid
        assert result.errors[0].field == "name"

    def test_name_too_long(self):
        result = self.validator.validate(name="x" * 256, category_id=1)
        assert [e.field for e in result.errors] == ["name"]

    def test_category_required(self):
        result = self.validator.validate(name="Widget", category_id=None)
        assert [e.field for e in result.errors] == ["category_id"]

    def test_negative_price(self):
        result = self.validator.validate(name="Widget", category_id=1, price=Decimal("-0.01"))
        assert [e.field for e in result.errors] == ["price"]

    def test_zero_price_allowed(self):
        result = self.validator.validate(name="Widget", category_id=1, price=Decimal("0"))
        assert result.is_valid

    def test_description_too_long(self):
        result = self.validator.validate(name="Widget", category_id=1, description="x" * 2001)
        assert [e.field for e in result.errors] == ["description"]

    def test_unknown_attribute(self):
        result = self.validator.validate(
            name="Widget",
            category_id=1,
            variations={1: 99},
            attribute_sets={},
        )
        assert result.to_list() == [
            {"field": "variations.1", "message": "Variation attribute 99 does not exist"}
        ]

    def test_attribute_from_other_set(self):
        result = self.validator.validate(
            name="Widget",
            category_id=1,
            variations={1: 20},
            attribute_sets={20: 2},
        )
        assert [e.field for e in result.errors] == ["variations.1"]

    def test_collects_every_error(self):
        result = self.validator.validate(name="", category_id=None, price=Decimal("-1"))
        assert [e.field for e in result.errors] == ["name", "category_id", "price"]
