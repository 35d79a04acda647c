"""
==============================================================================
Database Package
==============================================================================

SQLAlchemy database infrastructure, ORM models and the product repository.

Architecture:
------------
├── database.py   - DatabaseManager class, session factory
├── models.py     - Category, VariationSet, VariationAttribute, Product
├── repository.py - ProductRepository (duplicate query, variation links)
└── init_db.py    - DatabaseInitializer for setup and sample data

Usage:
------
    from app.db import DatabaseManager, Product, init_db

    db_manager = DatabaseManager()
    session = db_manager.get_session()
    products = session.query(Product).all()

==============================================================================
"""

from .database import DatabaseManager, Base, get_db
from .models import (
    Category,
    Product,
    VariationAttribute,
    VariationSet,
    product_variation_attribute,
)
from .repository import ProductFilters, ProductRepository
from .init_db import DatabaseInitializer, init_db

__all__ = [
    # Database management
    "DatabaseManager",
    "Base",
    "get_db",
    # Models
    "Category",
    "Product",
    "VariationAttribute",
    "VariationSet",
    "product_variation_attribute",
    # Repository
    "ProductFilters",
    "ProductRepository",
    # Initialization
    "DatabaseInitializer",
    "init_db",
]
