"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides test database, client and catalog fixtures.

==============================================================================
"""

import os

# Keep application startup off the on-disk database
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from typing import Dict, Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.database import Base, enable_sqlite_foreign_keys, get_db
from app.db.models import Category, Product, VariationAttribute, VariationSet
from app.db.repository import ProductRepository


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

# In-memory SQLite for testing
SQLALCHEMY_TEST_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
enable_sqlite_foreign_keys(engine)

TestingSessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    expire_on_commit=False,
    bind=engine,
)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    """Create a fresh database for each test."""
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """Create test client with database override."""
    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ============================================================================
# CATALOG FIXTURES
# ============================================================================

@pytest.fixture
def category(db: Session) -> Category:
    """Category with id 1."""
    category = Category(id=1, name="Widgets")
    db.add(category)
    db.commit()
    return category


@pytest.fixture
def other_category(db: Session) -> Category:
    """A second category."""
    category = Category(id=2, name="Gadgets")
    db.add(category)
    db.commit()
    return category


@pytest.fixture
def variation_sets(db: Session) -> Dict[str, VariationSet]:
    """
    Two variation sets with fixed IDs.

    Color (set 1): Red=10, Blue=11
    Size  (set 2): Small=20, Large=21
    Material (set 3): Wood=30
    """
    color = VariationSet(id=1, name="Color")
    color.attributes = [
        VariationAttribute(id=10, name="Red"),
        VariationAttribute(id=11, name="Blue"),
    ]
    size = VariationSet(id=2, name="Size")
    size.attributes = [
        VariationAttribute(id=20, name="Small"),
        VariationAttribute(id=21, name="Large"),
    ]
    material = VariationSet(id=3, name="Material")
    material.attributes = [
        VariationAttribute(id=30, name="Wood"),
    ]
    db.add_all([color, size, material])
    db.commit()
    return {"color": color, "size": size, "material": material}


@pytest.fixture
def make_product(db: Session, category: Category, variation_sets):
    """Factory persisting a product with variation links."""
    repository = ProductRepository(db)

    def _make(name: str = "Widget", category_id: int = 1, variations=None, product_id=None) -> Product:
        product = Product(id=product_id, name=name, category_id=category_id)
        repository.add(product)
        for attribute_id in (variations or {}).values():
            repository.add_variation_link(product.id, attribute_id)
        db.commit()
        return repository.get(product.id)

    return _make
