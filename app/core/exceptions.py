"""
Application Exception Handling

Single AppException class for all application errors with FastAPI integration.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


class AppException(Exception):
    """
    Unified application exception for all error scenarios.

    Provides consistent error response format across the entire API.

    Usage:
        raise AppException("Category not found", "CATEGORY_NOT_FOUND", 404)
        raise AppException("Product exists", "PRODUCT_EXISTS", 409, {"product_id": 5})

    Error Codes:
        Catalog:
            - CATEGORY_NOT_FOUND (404)
            - PRODUCT_NOT_FOUND (404)
            - VARIATION_SET_NOT_FOUND (404)
            - PRODUCT_EXISTS (409)
            - CATEGORY_EXISTS (409)
            - VARIATION_SET_EXISTS (409)
            - VARIATION_ATTRIBUTE_EXISTS (409)

        General:
            - VALIDATION_ERROR (422)
            - INTERNAL_ERROR (500)
    """

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            code: Machine-readable error code (e.g., "PRODUCT_NOT_FOUND")
            status_code: HTTP status code (default: 400)
            details: Additional error context (optional)
        """
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        error_dict = {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "timestamp": self.timestamp
            }
        }

        if self.details:
            error_dict["error"]["details"] = self.details

        return error_dict


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """
    FastAPI exception handler for AppException.

    Converts AppException to consistent JSON error response.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with FastAPI app.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)


# ============================================
# CONVENIENCE FACTORY FUNCTIONS
# ============================================

def category_not_found(category_id: Optional[int] = None) -> AppException:
    """Create category not found exception."""
    details = {"category_id": category_id} if category_id is not None else {}
    return AppException("Selected category not found", "CATEGORY_NOT_FOUND", 404, details)


def product_not_found(product_id: Optional[int] = None) -> AppException:
    """Create product not found exception."""
    details = {"product_id": product_id} if product_id is not None else {}
    return AppException("Product not found", "PRODUCT_NOT_FOUND", 404, details)


def variation_set_not_found(set_id: Optional[int] = None) -> AppException:
    """Create variation set not found exception."""
    details = {"variation_set_id": set_id} if set_id is not None else {}
    return AppException("Variation set not found", "VARIATION_SET_NOT_FOUND", 404, details)


def product_exists(name: str, existing_id: Optional[int] = None) -> AppException:
    """Create duplicate product (conflict) exception."""
    details: Dict[str, Any] = {"name": name}
    if existing_id is not None:
        details["existing_product_id"] = existing_id
    return AppException(
        "Could not save because the product already exists",
        "PRODUCT_EXISTS",
        409,
        details
    )


def category_exists(name: str) -> AppException:
    """Create category name already exists exception."""
    return AppException(
        f"Category '{name}' already exists",
        "CATEGORY_EXISTS",
        409,
        {"name": name}
    )


def variation_set_exists(name: str) -> AppException:
    """Create variation set name already exists exception."""
    return AppException(
        f"Variation set '{name}' already exists",
        "VARIATION_SET_EXISTS",
        409,
        {"name": name}
    )


def variation_attribute_exists(set_id: int, name: str) -> AppException:
    """Create variation attribute already exists exception."""
    return AppException(
        f"Variation attribute '{name}' already exists in this set",
        "VARIATION_ATTRIBUTE_EXISTS",
        409,
        {"variation_set_id": set_id, "name": name}
    )


def validation_error(errors: List[Dict[str, str]]) -> AppException:
    """Create validation error exception from a list of field errors."""
    return AppException("Validation failed", "VALIDATION_ERROR", 422, {"errors": errors})


def internal_error(message: str = "Internal server error") -> AppException:
    """Create internal server error exception."""
    return AppException(message, "INTERNAL_ERROR", 500)
