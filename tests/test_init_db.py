"""
==============================================================================
Database Initialization Tests
==============================================================================

Tests for catalog seeding from a JSON file.

==============================================================================
"""

import json

from sqlalchemy.orm import Session

from app.db.init_db import DatabaseInitializer
from app.db.models import Product


SEED = [
    {
        "title": "iPhone 9",
        "description": "An apple mobile",
        "price": 549,
        "discountPercentage": 12.96,
        "brand": "Apple",
        "category": "smartphones",
        "images": ["1.jpg"]
    },
    {"title": "Broken", "price": "not a number"},
]


class TestSeedProducts:
    """Tests for seeding an empty catalog."""

    def test_seed_empty_catalog(self, db: Session, tmp_path):
        """Test valid entries are inserted and invalid ones skipped."""
        path = tmp_path / "products.json"
        path.write_text(json.dumps({"products": SEED}), encoding="utf-8")

        inserted = DatabaseInitializer(session=db).seed_products(path)

        assert inserted == 1
        product = db.query(Product).one()
        assert product.title == "iPhone 9"
        assert product.discount_percentage == 12.96
        assert product.images == ["1.jpg"]
        assert product.comments == []

    def test_populated_catalog_untouched(self, db: Session, tmp_path, make_product):
        """Test seeding is skipped once products exist."""
        make_product("Existing")
        path = tmp_path / "products.json"
        path.write_text(json.dumps(SEED), encoding="utf-8")

        inserted = DatabaseInitializer(session=db).seed_products(path)

        assert inserted == 0
        assert db.query(Product).count() == 1
