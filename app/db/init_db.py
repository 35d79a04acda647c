"""
==============================================================================
Database Initialization Module
==============================================================================

Database initialization and setup utilities.

This module implements:
- DatabaseInitializer: Class for database setup operations
- Table creation and verification
- Sample catalog data for development (categories, variation sets)

Initialization Flow:
-------------------
1. Create all tables from ORM models
2. Seed sample categories and variation sets (if enabled)
3. Verify the connection

Usage:
------
    from app.db import init_db, DatabaseInitializer

    init_db()

    initializer = DatabaseInitializer()
    initializer.create_tables()
    initializer.seed_sample_data()

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.config import get_settings
from app.db.database import DatabaseManager
from app.db.models import Category, Product, VariationAttribute, VariationSet


# Module logger
logger = logging.getLogger(__name__)


SAMPLE_CATEGORIES: List[str] = ["Clothing", "Footwear", "Accessories"]

SAMPLE_VARIATION_SETS: Dict[str, List[str]] = {
    "Color": ["Black", "White", "Red", "Blue"],
    "Size": ["S", "M", "L", "XL"],
}


class DatabaseInitializer:
    """
    Database initialization manager.

    Attributes:
        _db_manager: DatabaseManager instance
        _settings: Application settings

    Example:
        >>> initializer = DatabaseInitializer()
        >>> initializer.initialize()
    """

    def __init__(
        self,
        db_manager: Optional[DatabaseManager] = None,
        session: Optional[Session] = None
    ) -> None:
        """
        Initialize the database initializer.

        Args:
            db_manager: Optional DatabaseManager instance (creates new if None)
            session: Optional existing session (creates new if None)
        """
        self._db_manager = db_manager or DatabaseManager()
        self._settings = get_settings()
        self._session = session

    # =========================================================================
    # SESSION MANAGEMENT
    # =========================================================================

    def _get_session(self) -> Session:
        if self._session is not None:
            return self._session
        return self._db_manager.get_session()

    # =========================================================================
    # TABLE OPERATIONS
    # =========================================================================

    def create_tables(self) -> None:
        """Create all database tables from ORM models."""
        logger.info("Creating database tables...")
        self._db_manager.create_tables()
        logger.info("✅ Database tables created successfully")

    # =========================================================================
    # SAMPLE DATA
    # =========================================================================

    def seed_sample_data(self) -> int:
        """
        Seed sample categories and variation sets.

        Existing rows with the same names are left alone.

        Returns:
            Number of rows created

        Raises:
            RuntimeError: In production
        """
        if self._settings.is_production:
            logger.error("Cannot seed sample data in production!")
            raise RuntimeError("Sample data seeding not allowed in production")

        session = self._get_session()
        created = 0

        try:
            for name in SAMPLE_CATEGORIES:
                if not session.query(Category).filter(Category.name == name).first():
                    session.add(Category(name=name))
                    created += 1

            for set_name, attribute_names in SAMPLE_VARIATION_SETS.items():
                variation_set = session.query(VariationSet).filter(
                    VariationSet.name == set_name
                ).first()

                if variation_set is None:
                    variation_set = VariationSet(name=set_name)
                    session.add(variation_set)
                    created += 1

                existing = {attribute.name for attribute in variation_set.attributes}
                for attribute_name in attribute_names:
                    if attribute_name not in existing:
                        variation_set.attributes.append(VariationAttribute(name=attribute_name))
                        created += 1

            session.commit()
            logger.info(f"✅ Sample catalog data seeded ({created} rows)")
            return created

        except Exception as e:
            session.rollback()
            logger.error(f"Failed to seed sample data: {e}")
            raise
        finally:
            if self._session is None:
                session.close()

    # =========================================================================
    # INITIALIZATION METHODS
    # =========================================================================

    def initialize(self) -> None:
        """
        Perform full database initialization.

        Creates tables, seeds sample data when enabled and verifies the
        connection.
        """
        logger.info("=" * 60)
        logger.info("Initializing database...")
        logger.info("=" * 60)

        self.create_tables()

        if self._settings.seed_sample_data and not self._settings.is_production:
            self.seed_sample_data()

        if self._db_manager.verify_connection():
            logger.info("✅ Database connection verified")
        else:
            logger.warning("⚠️ Database connection check failed")

        logger.info("Database initialization complete")

    def get_stats(self) -> dict:
        """
        Get catalog row counts.

        Returns:
            Dictionary with table counts
        """
        session = self._get_session()

        try:
            return {
                "categories": session.query(Category).count(),
                "variation_sets": session.query(VariationSet).count(),
                "variation_attributes": session.query(VariationAttribute).count(),
                "products": session.query(Product).count(),
            }
        finally:
            if self._session is None:
                session.close()


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def init_db() -> None:
    """
    Initialize the database (convenience function).

    Usage:
        from app.db import init_db
        init_db()
    """
    initializer = DatabaseInitializer()
    initializer.initialize()

