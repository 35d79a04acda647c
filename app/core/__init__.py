"""
==============================================================================
Core Package
==============================================================================

Core utilities and infrastructure for the application.

This package provides:
- Custom exception handling with consistent error responses
- FastAPI dependencies for database sessions and pagination
- Exception factory functions for common error scenarios

Modules:
--------
- exceptions: AppException class and error factory functions
- dependencies: FastAPI dependency injection functions

Usage:
------
    from app.core import AppException, get_pagination

    from app.core import exceptions
    raise exceptions.category_not_found(category_id)

==============================================================================
"""

from .exceptions import (
    AppException,
    register_exception_handlers,
)
from .dependencies import (
    PaginationParams,
    get_db,
    get_pagination,
)

__all__ = [
    # Exceptions
    "AppException",
    "register_exception_handlers",
    # Dependencies
    "PaginationParams",
    "get_db",
    "get_pagination",
]
