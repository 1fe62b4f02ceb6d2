"""
==============================================================================
SQLAlchemy ORM Models Module
==============================================================================

ORM model for the product catalog.

Each product row is treated as a document: nested data (images,
specifications, comments) lives in JSON columns and is read and written
together with the row.

Database Schema:
---------------

    ┌─────────────────────────────────────────────────────────────────┐
    │                          products                                │
    ├─────────────────────────────────────────────────────────────────┤
    │ id (VARCHAR(36), PK, UUID)                                      │
    │ title (VARCHAR, INDEXED)                                        │
    │ description (TEXT)                                              │
    │ price (FLOAT)                                                   │
    │ discount_percentage (FLOAT)                                     │
    │ stock (INTEGER)                                                 │
    │ brand (VARCHAR)                                                 │
    │ category (VARCHAR)                                              │
    │ images (JSON list of URLs)                                      │
    │ specifications (JSON object)                                    │
    │ comments (JSON list of comment objects, append-only)            │
    │ created_at (DATETIME, UTC)                                      │
    │ updated_at (DATETIME, UTC, AUTO UPDATE)                         │
    └─────────────────────────────────────────────────────────────────┘

==============================================================================
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import JSON, Column, DateTime, Float, Integer, String, Text

from app.db.database import Base


def utcnow() -> datetime:
    """Timezone-aware current time used for store-managed timestamps."""
    return datetime.now(timezone.utc)


# =============================================================================
# PRODUCT MODEL
# =============================================================================

class Product(Base):
    """
    Product catalog entry.

    Attributes:
        id: Store-assigned identifier (UUID string), immutable
        title: Product title, used for search and suggestions
        description: Free-form description
        price: Unit price
        discount_percentage: Discount applied to the price
        stock: Units in stock
        brand: Brand name
        category: Category name
        images: Image URLs
        specifications: Opaque specification object
        comments: Review comments in append order
        created_at: Creation timestamp
        updated_at: Last modification timestamp
    """

    __tablename__ = "products"

    # Column annotations are informational, not Mapped[]
    __allow_unmapped__ = True

    # =========================================================================
    # COLUMNS
    # =========================================================================

    id: str = Column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        doc="Unique product identifier (UUID)"
    )

    title: Optional[str] = Column(String(255), index=True, doc="Product title")

    description: Optional[str] = Column(Text, doc="Product description")

    price: Optional[float] = Column(Float, doc="Unit price")

    discount_percentage: Optional[float] = Column(Float, doc="Discount percentage")

    stock: Optional[int] = Column(Integer, doc="Units in stock")

    brand: Optional[str] = Column(String(255), doc="Brand name")

    category: Optional[str] = Column(String(255), index=True, doc="Category name")

    images: List[str] = Column(JSON, default=list, nullable=False, doc="Image URLs")

    specifications: Dict[str, Any] = Column(
        JSON,
        default=dict,
        nullable=False,
        doc="Opaque specification object"
    )

    comments: List[Dict[str, Any]] = Column(
        JSON,
        default=list,
        nullable=False,
        doc="Review comments, append-only"
    )

    created_at: datetime = Column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
        doc="Creation timestamp"
    )

    updated_at: datetime = Column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        doc="Last modification timestamp"
    )

    # =========================================================================
    # PROPERTIES
    # =========================================================================

    @property
    def comment_count(self) -> int:
        """Number of review comments."""
        return len(self.comments or [])

    def __repr__(self) -> str:
        return f"Product(id={self.id!r}, title={self.title!r})"
