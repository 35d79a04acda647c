"""
==============================================================================
Utilities Package
==============================================================================

Utility classes and functions for the application.

Modules:
--------
- validators: Product validation returning typed results

==============================================================================
"""

from .validators import (
    FieldError,
    ProductValidator,
    ValidationResult,
    filter_selections,
)

__all__ = [
    "FieldError",
    "ProductValidator",
    "ValidationResult",
    "filter_selections",
]
