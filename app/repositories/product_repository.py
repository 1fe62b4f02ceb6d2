"""
==============================================================================
Product Repository Module
==============================================================================

Storage-agnostic data access for the product catalog.

The service layer only talks to the ProductRepository interface; the
SQLAlchemy implementation below is the one wired into the application.

    ┌─────────────────┐
    │ ProductService  │
    └────────┬────────┘
             │
    ┌────────▼──────────┐
    │ ProductRepository │  ← interface
    └────────┬──────────┘
             │
    ┌────────▼─────────────┐
    │ SqlProductRepository │  ← SQLAlchemy session
    └──────────────────────┘

==============================================================================
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.db.models import Product
from app.utils.validators import LIKE_ESCAPE, escape_like


# Module logger
logger = logging.getLogger(__name__)


class ProductRepository(ABC):
    """
    Data access operations required by the catalog service.

    Title terms are matched as case-insensitive literal substrings; an
    empty term list matches every product.
    """

    @abstractmethod
    def distinct_titles(self) -> List[str]:
        """All distinct non-empty product titles."""

    @abstractmethod
    def search(
        self,
        title_terms: Sequence[str],
        offset: int,
        limit: int
    ) -> List[Product]:
        """Products whose title contains any term, ordered by id ascending."""

    @abstractmethod
    def count(self, title_terms: Sequence[str]) -> int:
        """Number of products whose title contains any term."""

    @abstractmethod
    def get(self, product_id: str) -> Optional[Product]:
        """Single product by id, or None."""

    @abstractmethod
    def get_many(self, product_ids: Sequence[str]) -> List[Product]:
        """Products with the given ids, newest first."""

    @abstractmethod
    def create(self, fields: Dict[str, Any]) -> Product:
        """Insert a product and return it with store-assigned fields."""

    @abstractmethod
    def update(self, product_id: str, fields: Dict[str, Any]) -> Optional[Product]:
        """Overwrite the given fields; None if the product does not exist."""

    @abstractmethod
    def append_comment(
        self,
        product_id: str,
        comment: Dict[str, Any]
    ) -> Optional[Product]:
        """Append a comment and persist the product; None if missing."""


class SqlProductRepository(ProductRepository):
    """
    SQLAlchemy implementation of ProductRepository.

    Each mutating method commits its own unit of work and rolls back on
    failure before re-raising.

    Example:
        >>> repo = SqlProductRepository(db_session)
        >>> product = repo.create({"title": "iPhone 9", "price": 549})
        >>> repo.get(product.id).title
        'iPhone 9'
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    # =========================================================================
    # QUERY HELPERS
    # =========================================================================

    @staticmethod
    def _title_filter(title_terms: Sequence[str]):
        clauses = [
            Product.title.ilike(f"%{escape_like(term)}%", escape=LIKE_ESCAPE)
            for term in title_terms
            if term
        ]
        if not clauses:
            return None
        return or_(*clauses)

    def _filtered(self, title_terms: Sequence[str]):
        query = self._db.query(Product)
        criterion = self._title_filter(title_terms)
        if criterion is not None:
            query = query.filter(criterion)
        return query

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def distinct_titles(self) -> List[str]:
        rows = (
            self._db.query(Product.title)
            .filter(Product.title.isnot(None))
            .filter(Product.title != "")
            .distinct()
            .all()
        )
        return [row[0] for row in rows]

    def search(
        self,
        title_terms: Sequence[str],
        offset: int,
        limit: int
    ) -> List[Product]:
        return (
            self._filtered(title_terms)
            .order_by(Product.id.asc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count(self, title_terms: Sequence[str]) -> int:
        return self._filtered(title_terms).count()

    def get(self, product_id: str) -> Optional[Product]:
        return self._db.query(Product).filter(Product.id == product_id).first()

    def get_many(self, product_ids: Sequence[str]) -> List[Product]:
        if not product_ids:
            return []
        return (
            self._db.query(Product)
            .filter(Product.id.in_(list(product_ids)))
            .order_by(Product.created_at.desc(), Product.id.asc())
            .all()
        )

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    def create(self, fields: Dict[str, Any]) -> Product:
        product = Product(**fields)
        product.comments = []

        try:
            self._db.add(product)
            self._db.commit()
            self._db.refresh(product)
        except Exception:
            self._db.rollback()
            raise

        return product

    def update(self, product_id: str, fields: Dict[str, Any]) -> Optional[Product]:
        product = self.get(product_id)
        if product is None:
            return None

        for field, value in fields.items():
            setattr(product, field, value)

        try:
            self._db.commit()
            self._db.refresh(product)
        except Exception:
            self._db.rollback()
            raise

        return product

    def append_comment(
        self,
        product_id: str,
        comment: Dict[str, Any]
    ) -> Optional[Product]:
        product = (
            self._db.query(Product)
            .filter(Product.id == product_id)
            .with_for_update()
            .first()
        )
        if product is None:
            self._db.rollback()
            return None

        # Reassign so the JSON column is flagged dirty
        product.comments = [*(product.comments or []), comment]

        try:
            self._db.commit()
            self._db.refresh(product)
        except Exception:
            self._db.rollback()
            raise

        return product
