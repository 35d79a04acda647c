"""
==============================================================================
Validation Utilities Module
==============================================================================

Validation classes for product input data.

This module implements:
- FieldError / ValidationResult: Typed validation outcome
- ProductValidator: Field rules for product create/update payloads
- filter_selections: Drops empty variation choices

Validation Rules for Products:
-----------------------------
- name: required, 1-255 characters after stripping
- category_id: required integer
- price: optional, not negative
- description: optional, at most 2000 characters
- variations: {variation_set_id: attribute_id}; every attribute must
  exist and belong to the set it is keyed under

==============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation error."""

    field: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass
class ValidationResult:
    """
    Outcome of a validation run.

    Attributes:
        errors: Field errors found; empty when valid
    """

    errors: List[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, field_name: str, message: str) -> None:
        self.errors.append(FieldError(field_name, message))

    def to_list(self) -> List[Dict[str, str]]:
        return [error.to_dict() for error in self.errors]


def filter_selections(raw: Optional[Mapping[Any, Any]]) -> Dict[int, int]:
    """
    Drop empty variation choices.

    Form submissions send one entry per variation set, with an empty value
    for sets the user left unselected.

    Args:
        raw: {variation_set_id: attribute_id or empty}

    Returns:
        Mapping with only the chosen attributes
    """
    if not raw:
        return {}
    return {
        int(set_id): int(attribute_id)
        for set_id, attribute_id in raw.items()
        if attribute_id not in (None, "", 0, "0")
    }


class ProductValidator:
    """
    Validator for product payloads.

    Example:
        >>> validator = ProductValidator()
        >>> result = validator.validate(name="", category_id=1)
        >>> result.is_valid
        False
        >>> result.errors[0].field
        'name'
    """

    NAME_MAX_LENGTH = 255
    DESCRIPTION_MAX_LENGTH = 2000

    def validate(
        self,
        name: Optional[str],
        category_id: Optional[int],
        price: Optional[Decimal] = None,
        description: Optional[str] = None,
        variations: Optional[Mapping[int, int]] = None,
        attribute_sets: Optional[Mapping[int, int]] = None,
    ) -> ValidationResult:
        """
        Validate a product payload.

        Args:
            name: Product name
            category_id: Category ID
            price: Optional unit price
            description: Optional description
            variations: Filtered {variation_set_id: attribute_id}
            attribute_sets: {attribute_id: variation_set_id} for the
                attributes referenced in ``variations`` that exist

        Returns:
            ValidationResult with all field errors found
        """
        result = ValidationResult()

        self._validate_name(name, result)

        if category_id is None:
            result.add("category_id", "Category is required")

        if price is not None and price < 0:
            result.add("price", "Price cannot be negative")

        if description is not None and len(description) > self.DESCRIPTION_MAX_LENGTH:
            result.add(
                "description",
                f"Description must be at most {self.DESCRIPTION_MAX_LENGTH} characters"
            )

        if variations:
            self._validate_variations(variations, attribute_sets or {}, result)

        return result

    def _validate_name(self, name: Optional[str], result: ValidationResult) -> None:
        if name is None or not name.strip():
            result.add("name", "Name is required")
            return

        if len(name.strip()) > self.NAME_MAX_LENGTH:
            result.add("name", f"Name must be at most {self.NAME_MAX_LENGTH} characters")

    def _validate_variations(
        self,
        variations: Mapping[int, int],
        attribute_sets: Mapping[int, int],
        result: ValidationResult
    ) -> None:
        for set_id, attribute_id in variations.items():
            owner = attribute_sets.get(attribute_id)

            if owner is None:
                result.add(
                    f"variations.{set_id}",
                    f"Variation attribute {attribute_id} does not exist"
                )
            elif owner != set_id:
                result.add(
                    f"variations.{set_id}",
                    f"Variation attribute {attribute_id} does not belong to variation set {set_id}"
                )
