"""
==============================================================================
Database Initialization Tests
==============================================================================

Tests for sample data seeding and catalog stats.

==============================================================================
"""

from sqlalchemy.orm import Session

from app.db.init_db import SAMPLE_CATEGORIES, SAMPLE_VARIATION_SETS, DatabaseInitializer


class TestDatabaseInitializer:
    """Tests for DatabaseInitializer with an injected session."""

    def test_seed_sample_data(self, db: Session):
        """Test seeding creates categories, sets and attributes."""
        initializer = DatabaseInitializer(session=db)
        created = initializer.seed_sample_data()

        attribute_count = sum(len(names) for names in SAMPLE_VARIATION_SETS.values())
        assert created == len(SAMPLE_CATEGORIES) + len(SAMPLE_VARIATION_SETS) + attribute_count

        stats = initializer.get_stats()
        assert stats["categories"] == len(SAMPLE_CATEGORIES)
        assert stats["variation_sets"] == len(SAMPLE_VARIATION_SETS)
        assert stats["variation_attributes"] == attribute_count
        assert stats["products"] == 0

    def test_seed_is_idempotent(self, db: Session):
        """Test seeding twice creates nothing new."""
        initializer = DatabaseInitializer(session=db)
        initializer.seed_sample_data()
        assert initializer.seed_sample_data() == 0

    def test_stats_count_products(self, db: Session, make_product):
        """Test product rows are counted."""
        make_product()
        assert DatabaseInitializer(session=db).get_stats()["products"] == 1
