"""
==============================================================================
SQLAlchemy ORM Models Module
==============================================================================

ORM models for the product catalog.

This module defines:
- Category: Product category
- VariationSet: A dimension of variation (e.g. "Color")
- VariationAttribute: A concrete value within a set (e.g. "Red")
- Product: Catalog entry, linked to one attribute per variation set

Database Schema:
---------------

    ┌──────────────────────┐        ┌──────────────────────────────┐
    │      categories      │        │        variation_sets        │
    ├──────────────────────┤        ├──────────────────────────────┤
    │ id (INT, PK)         │        │ id (INT, PK)                 │
    │ name (UNIQUE)        │        │ name (UNIQUE)                │
    │ description          │        │ created_at                   │
    │ created_at           │        └──────────────┬───────────────┘
    └──────────┬───────────┘                       │ 1:N
               │ 1:N                               ▼
               ▼                    ┌──────────────────────────────┐
    ┌──────────────────────┐        │     variation_attributes     │
    │       products       │        ├──────────────────────────────┤
    ├──────────────────────┤        │ id (INT, PK)                 │
    │ id (INT, PK)         │        │ variation_set_id (FK)        │
    │ name                 │        │ name                         │
    │ category_id (FK)     │        │ UNIQUE(variation_set_id,name)│
    │ description          │        └──────────────┬───────────────┘
    │ price                │                       │
    │ created_at           │                       │
    │ updated_at           │                       │
    └──────────┬───────────┘                       │
               │ N:M                               │
               ▼                                   ▼
    ┌─────────────────────────────────────────────────────────────┐
    │               product_variation_attribute                   │
    ├─────────────────────────────────────────────────────────────┤
    │ product_id (FK → products.id, CASCADE, PK)                  │
    │ variation_attribute_id (FK → variation_attributes.id, PK)   │
    └─────────────────────────────────────────────────────────────┘

==============================================================================
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship, Mapped

from app.db.database import Base


# =============================================================================
# ASSOCIATION TABLES
# =============================================================================

product_variation_attribute = Table(
    "product_variation_attribute",
    Base.metadata,
    Column(
        "product_id",
        Integer,
        ForeignKey("products.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "variation_attribute_id",
        Integer,
        ForeignKey("variation_attributes.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


# =============================================================================
# CATEGORY MODEL
# =============================================================================

class Category(Base):
    """
    Product category.

    Attributes:
        id: Auto-incrementing primary key
        name: Unique display name
        description: Optional free text
        created_at: Creation timestamp
    """

    __tablename__ = "categories"

    id: int = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        doc="Auto-incrementing category ID"
    )

    name: str = Column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
        doc="Unique category name"
    )

    description: Optional[str] = Column(
        String(500),
        nullable=True,
        doc="Optional category description"
    )

    created_at: datetime = Column(
        DateTime,
        default=func.now(),
        nullable=False,
        doc="Creation timestamp"
    )

    products: Mapped[List["Product"]] = relationship(
        "Product",
        back_populates="category",
        doc="Products in this category"
    )

    def __repr__(self) -> str:
        return f"Category(id={self.id}, name={self.name!r})"

    def __str__(self) -> str:
        return self.name


# =============================================================================
# VARIATION MODELS
# =============================================================================

class VariationSet(Base):
    """
    A dimension of product variation, e.g. "Color" or "Size".

    Attributes:
        id: Auto-incrementing primary key
        name: Unique display name
        created_at: Creation timestamp

    Relationships:
        attributes: Values available in this set
    """

    __tablename__ = "variation_sets"

    id: int = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        doc="Auto-incrementing variation set ID"
    )

    name: str = Column(
        String(100),
        unique=True,
        nullable=False,
        doc="Unique variation set name"
    )

    created_at: datetime = Column(
        DateTime,
        default=func.now(),
        nullable=False,
        doc="Creation timestamp"
    )

    attributes: Mapped[List["VariationAttribute"]] = relationship(
        "VariationAttribute",
        back_populates="variation_set",
        cascade="all, delete-orphan",
        order_by="VariationAttribute.id",
        doc="Attributes belonging to this set"
    )

    def __repr__(self) -> str:
        return (
            f"VariationSet(id={self.id}, name={self.name!r}, "
            f"attributes={len(self.attributes)})"
        )

    def __str__(self) -> str:
        return self.name


class VariationAttribute(Base):
    """
    A concrete value inside a variation set, e.g. "Red" in "Color".

    Attributes:
        id: Auto-incrementing primary key
        variation_set_id: Owning variation set
        name: Value name, unique within its set
    """

    __tablename__ = "variation_attributes"
    __table_args__ = (
        UniqueConstraint("variation_set_id", "name", name="uq_variation_attribute_set_name"),
    )

    id: int = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        doc="Auto-incrementing attribute ID"
    )

    variation_set_id: int = Column(
        Integer,
        ForeignKey("variation_sets.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        doc="Owning variation set"
    )

    name: str = Column(
        String(100),
        nullable=False,
        doc="Attribute name"
    )

    variation_set: Mapped["VariationSet"] = relationship(
        "VariationSet",
        back_populates="attributes",
        doc="Owning variation set"
    )

    products: Mapped[List["Product"]] = relationship(
        "Product",
        secondary=product_variation_attribute,
        back_populates="variation_attributes",
        doc="Products linked to this attribute"
    )

    def __repr__(self) -> str:
        return (
            f"VariationAttribute(id={self.id}, "
            f"variation_set_id={self.variation_set_id}, "
            f"name={self.name!r})"
        )

    def __str__(self) -> str:
        return self.name


# =============================================================================
# PRODUCT MODEL
# =============================================================================

class Product(Base):
    """
    Catalog product.

    A product is identified for duplicate detection by its name, its
    category and the set of variation attributes linked to it (at most
    one attribute per variation set).

    Attributes:
        id: Auto-incrementing primary key
        name: Display name
        category_id: Owning category
        description: Optional free text
        price: Optional unit price
        created_at: Creation timestamp
        updated_at: Last modification timestamp

    Relationships:
        category: Owning Category
        variation_attributes: Linked VariationAttribute rows
    """

    __tablename__ = "products"

    # =========================================================================
    # COLUMNS
    # =========================================================================

    id: int = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        doc="Auto-incrementing product ID"
    )

    name: str = Column(
        String(255),
        nullable=False,
        index=True,
        doc="Product name"
    )

    category_id: int = Column(
        Integer,
        ForeignKey("categories.id"),
        nullable=False,
        index=True,
        doc="Owning category"
    )

    description: Optional[str] = Column(
        Text,
        nullable=True,
        doc="Optional product description"
    )

    price: Optional[Decimal] = Column(
        Numeric(12, 2),
        nullable=True,
        doc="Unit price"
    )

    created_at: datetime = Column(
        DateTime,
        default=func.now(),
        nullable=False,
        doc="Creation timestamp"
    )

    updated_at: datetime = Column(
        DateTime,
        default=func.now(),
        onupdate=func.now(),
        nullable=False,
        doc="Last modification timestamp"
    )

    # =========================================================================
    # RELATIONSHIPS
    # =========================================================================

    category: Mapped["Category"] = relationship(
        "Category",
        back_populates="products",
        doc="Owning category"
    )

    variation_attributes: Mapped[List["VariationAttribute"]] = relationship(
        "VariationAttribute",
        secondary=product_variation_attribute,
        back_populates="products",
        order_by="VariationAttribute.variation_set_id",
        doc="Linked variation attributes"
    )

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def variation_selections(self) -> Dict[int, int]:
        """
        Rebuild the {variation_set_id: attribute_id} mapping from links.

        Returns:
            Mapping of variation set ID to the chosen attribute ID
        """
        return {
            attribute.variation_set_id: attribute.id
            for attribute in self.variation_attributes
        }

    def __repr__(self) -> str:
        return (
            f"Product(id={self.id}, name={self.name!r}, "
            f"category_id={self.category_id}, "
            f"variations={self.variation_selections})"
        )

    def __str__(self) -> str:
        return self.name
