"""
==============================================================================
Database Initialization Module
==============================================================================

Database setup for the catalog service.

This module implements:
- DatabaseInitializer: Table creation and optional catalog seeding

Initialization Flow:
-------------------
1. Create all tables from ORM models
2. If a seed file is configured and the catalog is empty, load it
3. Log initialization status

Seed File Format:
----------------
Either a JSON list of products or an object with a "products" list.
Keys use the wire names (title, description, price, discountPercentage,
stock, brand, category, images, specifications); unknown keys are ignored.

    [
      {"title": "iPhone 9", "description": "...", "price": 549,
       "brand": "Apple", "category": "smartphones"}
    ]

==============================================================================
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.config import get_settings
from app.db.database import DatabaseManager
from app.db.models import Product
from app.schemas.product import ProductCreate


# Module logger
logger = logging.getLogger(__name__)


class DatabaseInitializer:
    """
    Database initialization manager.

    Example:
        >>> initializer = DatabaseInitializer()
        >>> initializer.initialize()
    """

    def __init__(
        self,
        db_manager: Optional[DatabaseManager] = None,
        session: Optional[Session] = None
    ) -> None:
        self._db_manager = db_manager or DatabaseManager()
        self._settings = get_settings()
        self._session = session

    def _get_session(self) -> Session:
        if self._session is not None:
            return self._session
        return self._db_manager.get_session()

    # =========================================================================
    # TABLE OPERATIONS
    # =========================================================================

    def create_tables(self) -> None:
        """Create all tables that don't exist yet."""
        self._db_manager.create_tables()

    # =========================================================================
    # SEEDING
    # =========================================================================

    @staticmethod
    def load_seed_documents(path: Path) -> List[Dict[str, Any]]:
        """
        Read and validate seed products from a JSON file.

        Invalid entries are skipped with a warning.

        Raises:
            FileNotFoundError: If the file does not exist
            json.JSONDecodeError: If the file is not valid JSON
        """
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)

        if isinstance(data, dict):
            data = data.get("products", [])

        if not isinstance(data, list):
            logger.warning(f"Seed file has no product list: {path}")
            return []

        documents = []
        for index, item in enumerate(data):
            try:
                product = ProductCreate.model_validate(item)
            except ValidationError as e:
                logger.warning(f"Skipping seed product #{index}: {e.error_count()} errors")
                continue

            document = product.model_dump(exclude={"images", "specifications"})
            document["images"] = product.images or []
            document["specifications"] = product.specifications or {}
            document["comments"] = []
            documents.append(document)

        return documents

    def seed_products(self, path: Path) -> int:
        """
        Load seed products into an empty catalog.

        Returns:
            Number of products inserted (0 if the catalog was not empty)
        """
        session = self._get_session()
        try:
            if session.query(Product).count() > 0:
                logger.info("Catalog already populated, skipping seed")
                return 0

            documents = self.load_seed_documents(path)
            session.add_all([Product(**document) for document in documents])
            session.commit()
            logger.info(f"✅ Seeded {len(documents)} products from {path}")
            return len(documents)
        except Exception:
            session.rollback()
            raise
        finally:
            if self._session is None:
                session.close()

    # =========================================================================
    # FULL INITIALIZATION
    # =========================================================================

    def initialize(self) -> None:
        """Run table creation and optional seeding."""
        logger.info("Initializing database...")

        self.create_tables()

        seed_path = self._settings.seed_products_path
        if seed_path is not None:
            if seed_path.exists():
                self.seed_products(seed_path)
            else:
                logger.warning(f"⚠️ Seed file not found: {seed_path}")

        logger.info("Database initialization complete")


def init_db() -> None:
    """Initialize the database with default settings."""
    DatabaseInitializer().initialize()
