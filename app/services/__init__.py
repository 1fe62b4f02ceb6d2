"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes implementing the catalog operations.

Architecture Pattern: Service Layer
----------------------------------
    ┌─────────────────┐
    │   API Router    │
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │    Service      │  ← Business Logic
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │   Repository    │  ← Data Access (via ORM)
    └─────────────────┘

Usage:
------
    from app.services import ProductService
    from app.repositories import SqlProductRepository

    service = ProductService(SqlProductRepository(db_session))
    product = service.get_product(product_id)

==============================================================================
"""

from .product_service import ProductPage, ProductService, get_product_service

__all__ = [
    "ProductPage",
    "ProductService",
    "get_product_service",
]
